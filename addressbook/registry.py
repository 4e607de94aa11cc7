"""
Address Registry

The single source of truth mapping keys and labels to role-tagged
registrations for one test run.

Indices:

    by_key    Key   -> [RegisteredAddress, ...]   insertion order, first is primary
    by_label  label -> RegisteredAddress          label is the uniqueness anchor
    all       ordered set of RegisteredAddress    role scans

Invariants:

    1. A label binds at most one (key, role). Re-registering the identical
       (label, key, role) is a no-op; any other reuse raises
       DuplicateLabelError and leaves all three indices untouched.
    2. One key may carry several registrations under different labels.
    3. The first registration of a key is what label_of() reports.

register() is the only mutator. The existence check and the three inserts
run under one re-entrant lock, and every reader takes the same lock, so no
caller can observe a half-applied registration.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from addressbook.derivation import derive, derive_holding_account
from addressbook.errors import DuplicateLabelError
from addressbook.keys import DEFAULT_EXECUTABLES, TOKEN_PROGRAM_ID, Key
from addressbook.observability import get_logger
from addressbook.roles import (
    AddressRole,
    Custom,
    Derived,
    DerivedAccount,
    Executable,
    Holder,
    Issuer,
    RegisteredAddress,
    RoleKind,
    is_role,
)


class AddressRegistry:
    """
    Registry of labelled, role-tagged addresses.

    Example:
        registry = AddressRegistry.with_defaults()
        registry.register_holder(alice, "alice")
        registry.label_of(alice)   # "alice"
    """

    def __init__(self):
        self._by_key: Dict[Key, List[RegisteredAddress]] = {}
        self._by_label: Dict[str, RegisteredAddress] = {}
        # dict keys as an insertion-ordered set
        self._all: Dict[RegisteredAddress, None] = {}
        self._lock = threading.RLock()
        self._log = get_logger("registry")

    @classmethod
    def with_defaults(cls) -> "AddressRegistry":
        """New registry with the well-known executables registered."""
        registry = cls()
        registry.register_default_accounts()
        return registry

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, key: Key, label: str, role: AddressRole) -> RegisteredAddress:
        """
        Bind `label` to (key, role).

        Returns the stored registration. Raises DuplicateLabelError if the
        label is already bound to a different key or role.
        """
        if not isinstance(key, Key):
            raise TypeError(f"key must be a Key, got {type(key).__name__}")
        if not isinstance(label, str) or not label:
            raise ValueError("label must be a non-empty string")
        if not is_role(role):
            raise TypeError(f"Not an address role: {role!r}")

        registration = RegisteredAddress(key=key, label=label, role=role)

        with self._lock:
            existing = self._by_label.get(label)
            if existing is not None:
                if existing.key != key or existing.role != role:
                    raise DuplicateLabelError(label, existing, registration)
                return existing

            self._by_label[label] = registration
            self._all[registration] = None
            self._by_key.setdefault(key, []).append(registration)

        self._log.debug(
            "Registered address",
            label=label,
            key=str(key),
            role=registration.kind.value,
        )
        return registration

    def register_holder(self, key: Key, label: str) -> RegisteredAddress:
        return self.register(key, label, Holder())

    def register_issuer(self, key: Key, label: str) -> RegisteredAddress:
        return self.register(key, label, Issuer())

    def register_derived_account(
        self, key: Key, label: str, issuer: Key, holder: Key
    ) -> RegisteredAddress:
        return self.register(key, label, DerivedAccount(issuer=issuer, holder=holder))

    def register_derived(
        self,
        key: Key,
        label: str,
        seeds: Sequence[str],
        namespace: Key,
        discriminator: int,
    ) -> RegisteredAddress:
        return self.register(
            key, label, Derived(seeds=tuple(seeds), namespace=namespace, discriminator=discriminator)
        )

    def register_executable(self, key: Key, label: str) -> RegisteredAddress:
        return self.register(key, label, Executable())

    def register_custom(self, key: Key, label: str, name: str) -> RegisteredAddress:
        return self.register(key, label, Custom(name))

    def register_and_derive(
        self, label: str, seeds: Sequence[Any], namespace: Key
    ) -> Tuple[Key, int]:
        """
        Derive an address from seeds and register it under `label`.

        Derivation errors and DuplicateLabelError both surface as
        AddressBookError subclasses.
        """
        derived = derive(seeds, namespace)
        self.register_derived(
            derived.key, label, derived.seed_strings, namespace, derived.discriminator
        )
        return derived.key, derived.discriminator

    def register_holding_account(
        self,
        label: str,
        holder: Key,
        issuer: Key,
        token_program: Key = TOKEN_PROGRAM_ID,
    ) -> Key:
        """Derive and register the account holding `issuer` units for `holder`."""
        key = derive_holding_account(holder, issuer, token_program)
        self.register_derived_account(key, label, issuer=issuer, holder=holder)
        return key

    def register_default_accounts(self) -> None:
        for key, label in DEFAULT_EXECUTABLES:
            self.register_executable(key, label)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def label_of(self, key: Key) -> str:
        """Primary label for `key`, or its base58 text if unregistered."""
        primary = self.primary(key)
        return primary.label if primary else str(key)

    def lookup(self, key: Key) -> Optional[List[RegisteredAddress]]:
        with self._lock:
            entries = self._by_key.get(key)
            return list(entries) if entries else None

    def primary(self, key: Key) -> Optional[RegisteredAddress]:
        with self._lock:
            entries = self._by_key.get(key)
            return entries[0] if entries else None

    def by_label(self, label: str) -> Optional[RegisteredAddress]:
        with self._lock:
            return self._by_label.get(label)

    def find_by_role(self, role: AddressRole) -> Optional[Key]:
        """
        Key of a registration whose role equals `role`.

        Returns the earliest such registration; callers should not rely on
        which one comes back when several keys share a role.
        """
        with self._lock:
            for registration in self._all:
                if registration.role == role:
                    return registration.key
        return None

    def all_with_role_kind(self, kind: Union[RoleKind, str]) -> List[Key]:
        """Every key registered under a role of the given kind."""
        kind = RoleKind.parse(kind)
        with self._lock:
            return list(dict.fromkeys(r.key for r in self._all if r.kind is kind))

    def registrations(self) -> List[RegisteredAddress]:
        with self._lock:
            return list(self._all)

    def keys(self) -> List[Key]:
        with self._lock:
            return list(self._by_key)

    def contains(self, key: Key) -> bool:
        with self._lock:
            return key in self._by_key

    def count(self) -> int:
        """Number of distinct registered keys."""
        with self._lock:
            return len(self._by_key)

    def is_empty(self) -> bool:
        return self.count() == 0

    def __contains__(self, key: object) -> bool:
        return isinstance(key, Key) and self.contains(key)

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"AddressRegistry(keys={self.count()}, labels={len(self._by_label)})"
