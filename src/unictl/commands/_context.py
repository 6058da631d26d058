"""AppContext: the object every command receives via ``@click.pass_obj``.

The root group builds it from the resolved settings. It opens the ledger
store on demand, converts CLI amounts to micro-units, and owns the single
place where results are printed and exit codes chosen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unictl.domain.amounts import parse_amount
from unictl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from unictl.config.settings import UniSettings
    from unictl.infrastructure.store import LedgerStore
    from unictl.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by all commands.

    ``--help`` and ``--version`` never touch the database: the store is
    only opened when a command asks for it.
    """

    def __init__(self, settings: UniSettings) -> None:
        self.settings = settings
        self._store: LedgerStore | None = None

        from unictl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from unictl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> LedgerStore:
        """The ledger store (created lazily, plugins loaded)."""
        if self._store is None:
            from unictl.infrastructure.store import LedgerStore

            self._store = LedgerStore(self.settings)
            self._store.init_plugins()
        return self._store

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def amount(self, text: str, *, raw: bool = False) -> int:
        """Convert a CLI amount to micro-units.

        Token units by default (``1.5`` → ``1500000`` at 6 decimals), or
        integer micro-units with ``raw``. Decimals come from the stored ledger
        when it exists, else from the ``[token]`` config.
        """
        try:
            if raw:
                return int(text.replace("_", ""))
            if self.store.is_initialized():
                decimals = self.store.load(strict=False).decimals
            else:
                decimals = self.settings.token.decimals
            return parse_amount(text, decimals)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="AMOUNT") from exc

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Success goes to stdout (warnings to stderr unless in JSON mode);
        failure goes to stderr and exits with status 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
