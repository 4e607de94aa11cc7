"""
Debug session for one test run.

Wires an AddressRegistry to the executor under test. Helpers register
what they create using fixed label conventions:

    wallet:<name>    holders created by new_holder()
    mint:<name>      issuers registered by register_issuer()

When the executor rejects a transaction the session renders a failure
report through the registry, logs it and raises ExecutionFailedError.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Tuple

from addressbook.accounts import AccountRef
from addressbook.config import AddressBookConfig, get_config
from addressbook.errors import ExecutionFailedError
from addressbook.keys import TOKEN_PROGRAM_ID, Key, Keypair
from addressbook.observability import get_logger, get_run_id
from addressbook.registry import AddressRegistry
from addressbook.report import ExecutionFailure, render_failure, render_registry
from addressbook.rewriter import TextLabelRewriter
from addressbook.styles import Styler


class Executor(Protocol):
    """
    The VM under test.

    execute() returns success metadata, or an ExecutionFailure for a
    rejected transaction.
    """

    def execute(self, transaction: Any) -> Any:
        ...


class DebugSession:
    """Registry plus executor for a single test run."""

    def __init__(
        self,
        executor: Optional[Executor] = None,
        registry: Optional[AddressRegistry] = None,
        config: Optional[AddressBookConfig] = None,
    ):
        self.config = config or get_config()
        if registry is None:
            registry = AddressRegistry()
            if self.config.registry.register_defaults.get():
                registry.register_default_accounts()
        self.registry = registry
        self.executor = executor
        self.styler = Styler(self.config.render.color.get())
        self.run_id = get_run_id()
        self._log = get_logger("session")

    # -------------------------------------------------------------------------
    # Registration helpers
    # -------------------------------------------------------------------------

    def new_holder(self, name: str) -> Keypair:
        keypair = Keypair.generate()
        self.registry.register_holder(keypair.pubkey(), f"wallet:{name}")
        return keypair

    def register_issuer(self, name: str, key: Key) -> AccountRef:
        self.registry.register_issuer(key, f"mint:{name}")
        return AccountRef(key)

    def holding_account(
        self,
        label: str,
        holder: Key,
        issuer: Key,
        token_program: Key = TOKEN_PROGRAM_ID,
    ) -> AccountRef:
        key = self.registry.register_holding_account(label, holder, issuer, token_program)
        return AccountRef(key)

    def derive_with_bump(
        self, label: str, seeds: Sequence[Any], namespace: Key
    ) -> Tuple[Key, int]:
        return self.registry.register_and_derive(label, seeds, namespace)

    def derive(self, label: str, seeds: Sequence[Any], namespace: Key) -> AccountRef:
        key, _ = self.derive_with_bump(label, seeds, namespace)
        return AccountRef(key)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def rewriter(self) -> TextLabelRewriter:
        return TextLabelRewriter(
            self.registry,
            self.styler,
            self.config.render.annotate_roles.get(),
        )

    def describe(self, key: Key) -> str:
        return self.rewriter().format_address(key)

    def dump(self) -> str:
        return render_registry(
            self.registry,
            self.styler,
            self.config.render.rule_width.get(),
            self.config.render.label_width.get(),
        )

    def failure_report(self, failure: ExecutionFailure) -> str:
        report = render_failure(
            failure,
            self.registry,
            self.styler,
            self.config.render.annotate_roles.get(),
        )
        if self.config.session.dump_on_failure.get():
            report = f"{report}\n{self.dump()}"
        return report

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def execute(self, transaction: Any) -> Any:
        if self.executor is None:
            raise RuntimeError("DebugSession has no executor")

        result = self.executor.execute(transaction)
        if isinstance(result, ExecutionFailure):
            report = self.failure_report(result)
            self._log.error(
                "Transaction failed",
                run_id=self.run_id,
                error=result.error,
                report=report,
            )
            raise ExecutionFailedError(result, report)
        return result
