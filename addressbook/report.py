"""
Failure reports and registry dumps.

Both renderers only read the registry; labels are substituted through
TextLabelRewriter so raw keys in executor output come back human-readable.

Failure report layout:

    Transaction failed with error:
       <error>

    Transaction logs:
    <log lines with keys replaced by labels>

    Instructions in failed transaction:
       Instruction 0: <program label> [executable]
       Accounts: 2 total
         Account 0: alice [holder] [signer, writable]
         ...

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from addressbook.keys import Key
from addressbook.registry import AddressRegistry
from addressbook.rewriter import TextLabelRewriter
from addressbook.roles import Custom, Derived, RegisteredAddress, RoleKind
from addressbook.styles import ROLE_STYLES, Styler


# =============================================================================
# EXECUTOR-FACING VALUES
# =============================================================================

@dataclass(frozen=True)
class AccountMeta:
    key: Key
    is_signer: bool = False
    is_writable: bool = False


@dataclass(frozen=True)
class InstructionTrace:
    program: Key
    accounts: Tuple[AccountMeta, ...] = ()


@dataclass
class ExecutionFailure:
    """Typed failure returned by the executor for a rejected transaction."""
    error: str
    logs: List[str] = field(default_factory=list)
    instructions: List[InstructionTrace] = field(default_factory=list)


# =============================================================================
# FAILURE REPORT
# =============================================================================

def render_failure(
    failure: ExecutionFailure,
    registry: AddressRegistry,
    styler: Optional[Styler] = None,
    annotate_roles: Optional[bool] = None,
) -> str:
    styler = styler or Styler()
    rewriter = TextLabelRewriter(registry, styler, annotate_roles)

    lines = [
        "",
        styler.color("Transaction failed with error:", "bright_red", bold=True),
        f"   {styler.color(failure.error, 'bright_red')}",
        "",
        styler.color("Transaction logs:", "yellow", bold=True),
    ]
    lines.extend(rewriter.rewrite_lines(list(failure.logs)))

    lines.append("")
    lines.append(styler.color("Instructions in failed transaction:", "blue", bold=True))
    for i, ix in enumerate(failure.instructions):
        lines.append(
            f"   {styler.dim('Instruction')} {styler.bold(str(i))}: "
            f"{rewriter.format_address(ix.program)}"
        )
        lines.append(
            f"   {styler.dim('Accounts:')} {styler.color(f'{len(ix.accounts)} total', 'cyan')}"
        )
        for j, meta in enumerate(ix.accounts):
            flags = []
            if meta.is_signer:
                flags.append(styler.color("signer", "green"))
            if meta.is_writable:
                flags.append(styler.color("writable", "yellow"))
            flags_str = f" [{', '.join(flags)}]" if flags else ""
            lines.append(
                f"     {styler.dim('Account')} {styler.bold(str(j))}: "
                f"{rewriter.format_address(meta.key)}{flags_str}"
            )
    return "\n".join(lines)


# =============================================================================
# REGISTRY DUMP
# =============================================================================

# Section order and titles
_SECTIONS: Tuple[Tuple[RoleKind, str], ...] = (
    (RoleKind.EXECUTABLE, "Executables"),
    (RoleKind.HOLDER, "Holders"),
    (RoleKind.ISSUER, "Issuers"),
    (RoleKind.DERIVED, "Derived"),
    (RoleKind.DERIVED_ACCOUNT, "Derived accounts"),
    (RoleKind.CUSTOM, "Custom"),
)


def _row_suffix(registration: RegisteredAddress) -> str:
    role = registration.role
    if isinstance(role, Derived):
        return ",".join(role.seeds)
    if isinstance(role, Custom):
        return role.name
    return ""


def render_registry(
    registry: AddressRegistry,
    styler: Optional[Styler] = None,
    width: Optional[int] = None,
    label_width: Optional[int] = None,
) -> str:
    """Every registration grouped by role kind."""
    from addressbook.config import get_config

    render = get_config().render
    styler = styler or Styler()
    width = width or render.rule_width.get()
    label_width = label_width or render.label_width.get()

    if registry.is_empty():
        return "Address book is empty"

    groups: Dict[RoleKind, List[RegisteredAddress]] = {kind: [] for kind, _ in _SECTIONS}
    for registration in registry.registrations():
        groups[registration.kind].append(registration)

    lines = [
        "",
        styler.dim("═" * width),
        f"{styler.bold('Address Book')} ({registry.count()} keys, {len(registry.registrations())} labels):",
        styler.dim("─" * width),
    ]
    for kind, title in _SECTIONS:
        members = groups[kind]
        if not members:
            continue
        style = ROLE_STYLES[kind]
        lines.append("")
        lines.append(f"  {styler.paint(title, style)} {styler.dim(f'({len(members)})')}:")
        for registration in members:
            row = (
                f"    {styler.color('•', style.color)} "
                f"{styler.paint(registration.label.ljust(label_width), style)} "
                f"{styler.dim(str(registration.key))}"
            )
            suffix = _row_suffix(registration)
            if suffix:
                row = f"{row} {styler.dim(f'[{suffix}]')}"
            lines.append(row)
    lines.append(styler.dim("═" * width))
    return "\n".join(lines)
