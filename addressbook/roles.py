"""
Address Roles and Registrations

AddressRole is a closed union. The six role classes below are the complete
set; every formatter and filter dispatches through role_kind(), which rejects
anything else.

    Holder          ordinary account, no attributes
    Issuer          fungible-unit issuing account
    DerivedAccount  account tied to exactly one (issuer, holder) pair
    Derived         address derived from seeds under a namespace
    Executable      address hosting program code
    Custom          open string tag

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, Tuple, Union

from addressbook.keys import Key


class RoleKind(Enum):
    """Variant tag of an AddressRole, ignoring payload."""
    HOLDER = "holder"
    ISSUER = "issuer"
    DERIVED_ACCOUNT = "derived_account"
    DERIVED = "derived"
    EXECUTABLE = "executable"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Union["RoleKind", str]) -> "RoleKind":
        if isinstance(value, RoleKind):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown role kind '{value}' (expected one of: {valid})") from None


# =============================================================================
# ROLE VARIANTS
# =============================================================================

@dataclass(frozen=True)
class Holder:
    kind: ClassVar[RoleKind] = RoleKind.HOLDER


@dataclass(frozen=True)
class Issuer:
    kind: ClassVar[RoleKind] = RoleKind.ISSUER


@dataclass(frozen=True)
class DerivedAccount:
    issuer: Key
    holder: Key
    kind: ClassVar[RoleKind] = RoleKind.DERIVED_ACCOUNT


@dataclass(frozen=True)
class Derived:
    """Seeds are stored as their debug strings, not raw bytes."""
    seeds: Tuple[str, ...]
    namespace: Key
    discriminator: int
    kind: ClassVar[RoleKind] = RoleKind.DERIVED

    def __post_init__(self):
        if not isinstance(self.seeds, tuple):
            object.__setattr__(self, "seeds", tuple(self.seeds))
        if not 0 <= self.discriminator <= 255:
            raise ValueError(f"discriminator must be a byte, got {self.discriminator}")


@dataclass(frozen=True)
class Executable:
    kind: ClassVar[RoleKind] = RoleKind.EXECUTABLE


@dataclass(frozen=True)
class Custom:
    name: str
    kind: ClassVar[RoleKind] = RoleKind.CUSTOM


AddressRole = Union[Holder, Issuer, DerivedAccount, Derived, Executable, Custom]

ROLE_TYPES = (Holder, Issuer, DerivedAccount, Derived, Executable, Custom)


def is_role(value: object) -> bool:
    return type(value) in ROLE_TYPES


def role_kind(role: AddressRole) -> RoleKind:
    if not is_role(role):
        raise TypeError(f"Not an address role: {role!r}")
    return role.kind


def matches_kind(role: AddressRole, kinds: Iterable[RoleKind]) -> bool:
    return role_kind(role) in set(kinds)


# =============================================================================
# REGISTERED ADDRESS
# =============================================================================

@dataclass(frozen=True)
class RegisteredAddress:
    """
    A key with its label and role.

    Two registrations are interchangeable iff key, label and role are all
    equal; the dataclass equality and hash follow from that.
    """
    key: Key
    label: str
    role: AddressRole

    @property
    def kind(self) -> RoleKind:
        return role_kind(self.role)

    def __str__(self) -> str:
        role = self.role
        if isinstance(role, DerivedAccount):
            return f"{self.key} [derived_account issuer:{role.issuer} holder:{role.holder}]"
        if isinstance(role, Derived):
            return f"{self.key} [derived seeds:{','.join(role.seeds)} bump:{role.discriminator}]"
        if isinstance(role, Custom):
            return f"{self.key} [{role.name}]"
        return f"{self.key} [{role_kind(role).value}]"
