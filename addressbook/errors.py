"""
Address Book Error Types

Every failure the registry, deriver and account helpers can report. All of
them derive from AddressBookError so a test harness can catch the whole
family in one place; each carries the offending values as attributes.

Errors are raised to the immediate caller. The registry, deriver and account
helpers never log, retry or swallow them; DebugSession logs a failed
execution once before raising ExecutionFailedError.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from typing import Any, Optional


class AddressBookError(Exception):
    """Base exception for address book failures."""
    pass


# =============================================================================
# REGISTRATION
# =============================================================================

class DuplicateLabelError(AddressBookError):
    """A label is already bound to a different (key, role) pair."""

    def __init__(self, label: str, existing: Any = None, attempted: Any = None):
        self.label = label
        self.existing = existing
        self.attempted = attempted
        super().__init__(f"Label '{label}' already exists in address book")


class InvalidKeyError(AddressBookError, ValueError):
    """Bytes or text that cannot be interpreted as a 32-byte key."""

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(message)


# =============================================================================
# DERIVATION
# =============================================================================

class DerivationError(AddressBookError):
    """Base exception for address derivation failures."""
    pass


class SeedTooLongError(DerivationError):
    """A single seed exceeds the per-seed byte limit."""

    def __init__(self, index: int, length: int, limit: int = 32):
        self.index = index
        self.length = length
        self.limit = limit
        super().__init__(
            f"Seed {index} is {length} bytes; maximum seed length is {limit}"
        )


class TooManySeedsError(DerivationError):
    """More seeds than the derivation primitive accepts."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"{count} seeds supplied; at most {limit} allowed")


class InvalidSeedsError(DerivationError):
    """The seeds hash to a point on the curve (a usable signing key)."""
    pass


class DiscriminatorExhaustedError(DerivationError):
    """No discriminator in 255..0 produced an off-curve address."""

    def __init__(self, namespace: Any = None):
        self.namespace = namespace
        super().__init__(
            f"Unable to find a valid derived address for namespace {namespace}"
        )


# =============================================================================
# ACCOUNTS AND EXECUTION
# =============================================================================

class AccountNotFoundError(AddressBookError):
    """An account that was expected to exist is missing."""

    def __init__(self, key: Any, label: Optional[str] = None):
        self.key = key
        self.label = label
        if label and label != str(key):
            super().__init__(f"Account not found: {label} ({key})")
        else:
            super().__init__(f"Account not found: {key}")


class ExecutionFailedError(AddressBookError):
    """The executor rejected a transaction; carries the rendered report."""

    def __init__(self, failure: Any, report: str = ""):
        self.failure = failure
        self.report = report
        super().__init__(f"Transaction failed: {getattr(failure, 'error', failure)}")
