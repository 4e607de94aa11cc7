"""Tests for failure reports and registry dumps."""

from colorama import Fore
from colorama import Style as Ansi

from addressbook.keys import SYSTEM_PROGRAM_ID, Key
from addressbook.registry import AddressRegistry
from addressbook.report import (
    AccountMeta,
    ExecutionFailure,
    InstructionTrace,
    render_failure,
    render_registry,
)
from addressbook.styles import Styler


class TestRenderFailure:

    def _failure(self, alice, stranger):
        return ExecutionFailure(
            error="InstructionError(0, InsufficientFunds)",
            logs=[
                f"Program {SYSTEM_PROGRAM_ID} invoke [1]",
                f"Transfer: insufficient lamports in {alice}",
            ],
            instructions=[
                InstructionTrace(
                    program=SYSTEM_PROGRAM_ID,
                    accounts=(
                        AccountMeta(alice, is_signer=True, is_writable=True),
                        AccountMeta(stranger, is_writable=True),
                        AccountMeta(alice),
                    ),
                )
            ],
        )

    def test_layout(self, plain_styler):
        registry = AddressRegistry.with_defaults()
        alice, stranger = Key.unique(), Key.unique()
        registry.register_holder(alice, "wallet:alice")

        lines = render_failure(
            self._failure(alice, stranger), registry, plain_styler, annotate_roles=True
        ).splitlines()

        assert lines[1] == "Transaction failed with error:"
        assert lines[2] == "   InstructionError(0, InsufficientFunds)"
        assert "Transaction logs:" in lines
        assert "Program system_program [executable] invoke [1]" in lines
        assert "Transfer: insufficient lamports in wallet:alice [holder]" in lines
        assert "Instructions in failed transaction:" in lines
        assert "   Instruction 0: system_program [executable]" in lines
        assert "   Accounts: 3 total" in lines
        assert "     Account 0: wallet:alice [holder] [signer, writable]" in lines
        assert f"     Account 1: {stranger} [writable]" in lines
        assert "     Account 2: wallet:alice [holder]" in lines

    def test_without_annotations(self, plain_styler):
        registry = AddressRegistry()
        alice = Key.unique()
        registry.register_holder(alice, "wallet:alice")
        failure = ExecutionFailure(error="boom", logs=[f"owner {alice}"])
        text = render_failure(failure, registry, plain_styler, annotate_roles=False)
        assert "owner wallet:alice" in text.splitlines()

    def test_registry_not_modified(self, plain_styler):
        registry = AddressRegistry.with_defaults()
        before = registry.registrations()
        render_failure(self._failure(Key.unique(), Key.unique()), registry, plain_styler)
        assert registry.registrations() == before

    def test_colored_error_line(self):
        failure = ExecutionFailure(error="boom")
        text = render_failure(failure, AddressRegistry(), Styler(enabled=True))
        assert f"{Fore.LIGHTRED_EX}boom{Ansi.RESET_ALL}" in text


class TestRenderRegistry:

    def test_empty(self, registry, plain_styler):
        assert render_registry(registry, plain_styler) == "Address book is empty"

    def test_sections_in_order(self, plain_styler):
        registry = AddressRegistry.with_defaults()
        alice, mint = Key.unique(), Key.unique()
        registry.register_custom(Key.unique(), "feed", "oracle")
        registry.register_holder(alice, "alice")
        registry.register_issuer(mint, "mint:usdc")
        registry.register_and_derive("vault", ["vault", "1"], Key.unique())
        registry.register_holding_account("alice:usdc", alice, mint)

        text = render_registry(registry, plain_styler, width=40, label_width=12)
        lines = text.splitlines()

        assert lines[1] == "═" * 40
        assert lines[2] == "Address Book (8 keys, 8 labels):"
        assert lines[3] == "─" * 40
        assert lines[-1] == "═" * 40

        headers = [line.strip() for line in lines if line.startswith("  ") and line.endswith(":")]
        assert headers == [
            "Executables (3):",
            "Holders (1):",
            "Issuers (1):",
            "Derived (1):",
            "Derived accounts (1):",
            "Custom (1):",
        ]

    def test_rows(self, plain_styler):
        registry = AddressRegistry()
        alice, ns = Key.unique(), Key.unique()
        registry.register_holder(alice, "alice")
        vault, _ = registry.register_and_derive("vault", ["vault", "1"], ns)
        feed = Key.unique()
        registry.register_custom(feed, "feed", "oracle")

        lines = render_registry(registry, plain_styler, width=40, label_width=8).splitlines()

        assert f"    • alice    {alice}" in lines
        assert f"    • vault    {vault} [vault,1]" in lines
        assert f"    • feed     {feed} [oracle]" in lines

    def test_header_counts_keys_and_labels(self, registry, plain_styler):
        shared = Key.unique()
        registry.register_holder(shared, "alice")
        registry.register_custom(shared, "alice-oracle", "oracle")
        registry.register_holder(Key.unique(), "bob")

        lines = render_registry(registry, plain_styler).splitlines()

        assert lines[2] == "Address Book (2 keys, 3 labels):"
        assert sum(1 for line in lines if line.startswith("    • ")) == 3

    def test_empty_sections_omitted(self, registry, plain_styler):
        registry.register_holder(Key.unique(), "alice")
        text = render_registry(registry, plain_styler)
        assert "Holders (1):" in text
        assert "Executables" not in text
        assert "Custom" not in text

    def test_widths_from_config(self, registry, plain_styler, monkeypatch):
        monkeypatch.setenv("ADDRESSBOOK_RULE_WIDTH", "25")
        registry.register_holder(Key.unique(), "alice")
        lines = render_registry(registry, plain_styler).splitlines()
        assert lines[1] == "═" * 25
