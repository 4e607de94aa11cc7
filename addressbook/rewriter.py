"""
Text label rewriting.

Replaces raw base58 keys in free text (execution logs, error messages) with
the primary label of each registered key.

Keys are substituted longest text form first. A shorter key's text can be a
substring of a longer key's text; doing the longer one first means the
shorter one can never match inside it. Substitution is plain substring
replacement, not token-aware.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from addressbook.keys import Key
from addressbook.registry import AddressRegistry
from addressbook.roles import Custom, Derived, RegisteredAddress
from addressbook.styles import UNKNOWN, Styler


class TextLabelRewriter:
    """Renders registered keys as labels; never mutates the registry."""

    def __init__(
        self,
        registry: AddressRegistry,
        styler: Optional[Styler] = None,
        annotate_roles: Optional[bool] = None,
    ):
        if annotate_roles is None:
            from addressbook.config import get_config

            annotate_roles = get_config().render.annotate_roles.get()
        self.registry = registry
        self.styler = styler or Styler()
        self.annotate_roles = annotate_roles

    def _tag(self, registration: RegisteredAddress) -> str:
        role = registration.role
        if isinstance(role, Derived):
            first = role.seeds[0] if role.seeds else ""
            return f"[derived:{first}]"
        if isinstance(role, Custom):
            return f"[{role.name}]"
        return f"[{registration.kind.value}]"

    def render_label(self, registration: RegisteredAddress, annotate: bool = True) -> str:
        label = self.styler.role(registration.label, registration.role)
        if not annotate:
            return label
        return f"{label} {self.styler.dim(self._tag(registration))}"

    def format_address(self, key: Key) -> str:
        """Label plus role tag, or the raw key in red when unregistered."""
        primary = self.registry.primary(key)
        if primary is None:
            return self.styler.paint(str(key), UNKNOWN)
        return self.render_label(primary)

    def replacements(self) -> List[Tuple[str, str]]:
        """(key text, replacement) pairs in substitution order."""
        pairs = []
        for key in self.registry.keys():
            primary = self.registry.primary(key)
            if primary is None:
                continue
            pairs.append((str(key), self.render_label(primary, self.annotate_roles)))
        # sorted() is stable: equal lengths keep registry order
        return sorted(pairs, key=lambda pair: len(pair[0]), reverse=True)

    def rewrite(self, text: str) -> str:
        result = text
        for key_text, replacement in self.replacements():
            result = result.replace(key_text, replacement)
        return result

    def rewrite_lines(self, lines: List[str]) -> List[str]:
        replacements = self.replacements()
        out = []
        for line in lines:
            for key_text, replacement in replacements:
                line = line.replace(key_text, replacement)
            out.append(line)
        return out
