"""AppContext — shared state for one autocommit invocation.

Created by the CLI command and torn down with the Click context.  Provides
lazy Toolchain initialization and centralized result handling (console
routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from autocommit.output.console import Reporter

if TYPE_CHECKING:
    from autocommit.config.settings import AutoCommitSettings
    from autocommit.infrastructure.toolchain import Toolchain
    from autocommit.services.result import ServiceResult


class AppContext:
    """Settings, reporter, and toolchain for the running command.

    The toolchain is lazily initialized on first use so ``--help`` and
    ``--version`` never touch git or the network.
    """

    def __init__(self, settings: AutoCommitSettings) -> None:
        self.settings = settings
        self.reporter = Reporter()
        self._toolchain: Toolchain | None = None

        # Configure structured logging
        from autocommit.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def toolchain(self) -> Toolchain:
        """The toolchain instance (created lazily on first access)."""
        if self._toolchain is None:
            from autocommit.infrastructure.toolchain import Toolchain

            self._toolchain = Toolchain(self.settings)
        return self._toolchain

    @property
    def interactive(self) -> bool:
        return not self.settings.no_interact

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question (default no). Always no under --no-interact."""
        if not self.interactive:
            return False
        return click.confirm(question, default=False)

    def require(self, result: ServiceResult) -> ServiceResult:
        """Return a successful result, or report the failure and exit 1.

        Warnings on successful results are reported before returning.
        """
        if not result.ok:
            error = result.error
            self.reporter.error(error.message if error else f"{result.op} failed")
            if error is not None:
                stderr = error.detail.get("stderr")
                if stderr:
                    click.echo(stderr, err=True)
                hint = error.detail.get("hint")
                if hint:
                    self.reporter.error(hint)
            raise SystemExit(1)
        for warning in result.warnings:
            self.reporter.warning(warning)
        return result

    def abort(self, message: str) -> NoReturn:
        self.reporter.error(message)
        raise SystemExit(1)

    def close(self) -> None:
        if self._toolchain is not None:
            self._toolchain.close()
