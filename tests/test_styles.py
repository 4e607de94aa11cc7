"""Tests for role styles and the colorama-backed Styler."""

import pytest
from colorama import Fore
from colorama import Style as Ansi

from addressbook.keys import Key
from addressbook.roles import Custom, Derived, Executable, Holder, RoleKind
from addressbook.styles import DIM, ROLE_STYLES, UNKNOWN, Style, Styler, style_for


class TestRoleStyles:

    def test_every_kind_has_a_style(self):
        assert set(ROLE_STYLES) == set(RoleKind)

    def test_role_styles_are_distinct(self):
        assert len({s.color for s in ROLE_STYLES.values()}) == len(RoleKind)

    def test_style_ignores_payload(self):
        ns = Key.unique()
        assert style_for(Derived(("a",), ns, 1)) == style_for(Derived(("b",), ns, 2))
        assert style_for(Custom("x")) == ROLE_STYLES[RoleKind.CUSTOM]

    def test_unknown_color_token_rejected(self):
        with pytest.raises(ValueError):
            Style("mauve")


class TestStyler:

    def test_prefix_uses_colorama_codes(self):
        assert Style("bright_cyan", bold=True).prefix() == Ansi.BRIGHT + Fore.LIGHTCYAN_EX
        assert DIM.prefix() == Ansi.DIM
        assert UNKNOWN.prefix() == Fore.LIGHTRED_EX

    def test_enabled_wraps_and_resets(self):
        styler = Styler(enabled=True)
        assert styler.role("dex", Executable()) == (
            f"{Ansi.BRIGHT}{Fore.LIGHTBLUE_EX}dex{Ansi.RESET_ALL}"
        )
        assert styler.dim("[holder]") == f"{Ansi.DIM}[holder]{Ansi.RESET_ALL}"

    def test_disabled_returns_text(self):
        styler = Styler(enabled=False)
        assert styler.role("alice", Holder()) == "alice"
        assert styler.color("boom", "bright_red", bold=True) == "boom"

    def test_empty_style_leaves_text(self):
        assert Styler(enabled=True).paint("plain", Style()) == "plain"

    def test_enabled_from_config(self, monkeypatch):
        monkeypatch.setenv("ADDRESSBOOK_COLOR", "false")
        assert Styler().enabled is False
