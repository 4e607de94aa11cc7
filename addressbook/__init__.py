"""
ADDRESS BOOK — Labelled Addresses for Ledger VM Test Runs

Maps opaque 32-byte keys to human-readable labels and roles, derives
deterministic program-owned addresses from seeds, and rewrites raw keys in
execution logs into their labels.

Architecture
────────────

    ┌─────────────────────────────────────────────────────────────────────────┐
    │                          ADDRESS BOOK                                    │
    │                                                                          │
    │  SESSION                                                                 │
    │    session.py      Registry + executor for one test run                 │
    │    report.py       Failure reports and registry dumps                   │
    │    accounts.py     Key handles with load-with-expectation               │
    │                                                                          │
    │  REGISTRY                                                                │
    │    registry.py     Triple-index registry, label uniqueness              │
    │    rewriter.py     Longest-key-first label substitution                 │
    │    styles.py       Role kind → terminal style                           │
    │    roles.py        Closed role union, RegisteredAddress                 │
    │                                                                          │
    │  DERIVATION                                                              │
    │    derivation.py   Seeds + namespace → off-curve address + bump         │
    │    seeds.py        Seed bytes and debug strings                         │
    │    keys.py         Key, base58, Ed25519 keypairs, well-known programs   │
    │                                                                          │
    │  SUPPORT                                                                 │
    │    errors.py  config.py  observability.py                               │
    └─────────────────────────────────────────────────────────────────────────┘

Design Principles
─────────────────

    Labels Are Unique: a label binds one (key, role). Conflicting reuse fails
    with DuplicateLabelError and changes nothing.

    Derivation Is Pure: identical seeds and namespace give the identical
    address and bump in every process.

    Display Never Feeds Back: seed debug strings and styled labels are for
    humans only and never influence an address.

Copyright © 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

__version__ = "0.3.0"

# Lazy imports to avoid circular dependencies
def __getattr__(name):
    """Lazy import address book modules on first access."""

    if name in ("Key", "Keypair", "b58encode", "b58decode", "SYSTEM_PROGRAM_ID",
                "TOKEN_PROGRAM_ID", "ASSOCIATED_TOKEN_PROGRAM_ID", "DEFAULT_EXECUTABLES"):
        from addressbook import keys
        return getattr(keys, name)

    if name in ("seed_bytes", "seed_to_string", "encode_seeds"):
        from addressbook import seeds
        return getattr(seeds, name)

    if name in ("DerivedAddress", "derive", "find_derived_address",
                "create_derived_address", "derive_holding_account", "is_on_curve",
                "MAX_SEED_LEN", "MAX_SEEDS"):
        from addressbook import derivation
        return getattr(derivation, name)

    if name in ("AddressRole", "RoleKind", "RegisteredAddress", "Holder", "Issuer",
                "DerivedAccount", "Derived", "Executable", "Custom", "role_kind"):
        from addressbook import roles
        return getattr(roles, name)

    if name == "AddressRegistry":
        from addressbook import registry
        return registry.AddressRegistry

    if name == "TextLabelRewriter":
        from addressbook import rewriter
        return rewriter.TextLabelRewriter

    if name in ("Style", "Styler", "ROLE_STYLES"):
        from addressbook import styles
        return getattr(styles, name)

    if name in ("AccountMeta", "InstructionTrace", "ExecutionFailure",
                "render_failure", "render_registry"):
        from addressbook import report
        return getattr(report, name)

    if name == "AccountRef":
        from addressbook import accounts
        return accounts.AccountRef

    if name == "DebugSession":
        from addressbook import session
        return session.DebugSession

    if name in ("AddressBookError", "DuplicateLabelError", "DerivationError",
                "SeedTooLongError", "TooManySeedsError", "InvalidSeedsError",
                "DiscriminatorExhaustedError", "InvalidKeyError",
                "AccountNotFoundError", "ExecutionFailedError"):
        from addressbook import errors
        return getattr(errors, name)

    raise AttributeError(f"module 'addressbook' has no attribute '{name}'")

__all__ = [
    "__version__",
    # Keys
    "Key",
    "Keypair",
    # Derivation
    "DerivedAddress",
    "derive",
    "find_derived_address",
    "derive_holding_account",
    # Roles
    "AddressRole",
    "RoleKind",
    "RegisteredAddress",
    # Registry
    "AddressRegistry",
    "TextLabelRewriter",
    # Session
    "AccountRef",
    "DebugSession",
    # Errors
    "AddressBookError",
    "DuplicateLabelError",
    "DerivationError",
    "AccountNotFoundError",
]
