"""
Account references.

AccountRef is a lightweight handle to an account by key. Loading goes
through any object with a get_account(key) method (the executor's account
store); load() insists the account exists, maybe_load() does not.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

from addressbook.errors import AccountNotFoundError
from addressbook.keys import Key

T = TypeVar("T")


class AccountSource(Protocol):
    def get_account(self, key: Key) -> Optional[Any]:
        ...


@dataclass(frozen=True)
class AccountRef(Generic[T]):
    key: Key

    def maybe_load(
        self,
        source: AccountSource,
        decode: Optional[Callable[[Any], T]] = None,
    ) -> Optional[T]:
        account = source.get_account(self.key)
        if account is None:
            return None
        return decode(account) if decode else account

    def load(
        self,
        source: AccountSource,
        decode: Optional[Callable[[Any], T]] = None,
        registry: Any = None,
    ) -> T:
        """Load the account or raise AccountNotFoundError."""
        account = source.get_account(self.key)
        if account is None:
            label = registry.label_of(self.key) if registry is not None else None
            raise AccountNotFoundError(self.key, label)
        return decode(account) if decode else account

    def label(self, registry: Any) -> str:
        return registry.label_of(self.key)

    def __bytes__(self) -> bytes:
        return bytes(self.key)

    def __str__(self) -> str:
        return str(self.key)
