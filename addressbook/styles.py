"""
Role styles for terminal output.

A pure table from RoleKind to a Style token, plus a Styler that renders
tokens through colorama. With color disabled the Styler returns text
unchanged, which is what the tests and non-terminal sinks use.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from colorama import Fore, just_fix_windows_console
from colorama import Style as Ansi

from addressbook.roles import AddressRole, RoleKind, role_kind


# Color token -> colorama foreground
_COLORS: Dict[str, str] = {
    "bright_red": Fore.LIGHTRED_EX,
    "bright_green": Fore.LIGHTGREEN_EX,
    "bright_yellow": Fore.LIGHTYELLOW_EX,
    "bright_blue": Fore.LIGHTBLUE_EX,
    "bright_magenta": Fore.LIGHTMAGENTA_EX,
    "bright_cyan": Fore.LIGHTCYAN_EX,
    "bright_white": Fore.LIGHTWHITE_EX,
    "red": Fore.RED,
    "green": Fore.GREEN,
    "yellow": Fore.YELLOW,
    "blue": Fore.BLUE,
    "cyan": Fore.CYAN,
}


@dataclass(frozen=True)
class Style:
    color: Optional[str] = None
    bold: bool = False
    dim: bool = False

    def __post_init__(self):
        if self.color is not None and self.color not in _COLORS:
            raise ValueError(f"Unknown color token '{self.color}'")

    def prefix(self) -> str:
        parts = []
        if self.bold:
            parts.append(Ansi.BRIGHT)
        if self.dim:
            parts.append(Ansi.DIM)
        if self.color:
            parts.append(_COLORS[self.color])
        return "".join(parts)


ROLE_STYLES: Dict[RoleKind, Style] = {
    RoleKind.HOLDER: Style("bright_cyan", bold=True),
    RoleKind.ISSUER: Style("bright_green", bold=True),
    RoleKind.DERIVED_ACCOUNT: Style("bright_yellow", bold=True),
    RoleKind.DERIVED: Style("bright_magenta", bold=True),
    RoleKind.EXECUTABLE: Style("bright_blue", bold=True),
    RoleKind.CUSTOM: Style("bright_white", bold=True),
}

DIM = Style(dim=True)
UNKNOWN = Style("bright_red")


def style_for(role: AddressRole) -> Style:
    return ROLE_STYLES[role_kind(role)]


class Styler:
    """Applies styles as terminal escapes when enabled."""

    def __init__(self, enabled: Optional[bool] = None):
        if enabled is None:
            from addressbook.config import get_config

            enabled = get_config().render.color.get()
        self.enabled = enabled
        if enabled:
            # no-op outside legacy Windows consoles
            just_fix_windows_console()

    def paint(self, text: str, style: Style) -> str:
        prefix = style.prefix()
        if not self.enabled or not prefix:
            return text
        return f"{prefix}{text}{Ansi.RESET_ALL}"

    def dim(self, text: str) -> str:
        return self.paint(text, DIM)

    def bold(self, text: str) -> str:
        return self.paint(text, Style(bold=True))

    def color(self, text: str, color: str, bold: bool = False) -> str:
        return self.paint(text, Style(color, bold=bold))

    def role(self, text: str, role: AddressRole) -> str:
        return self.paint(text, style_for(role))
