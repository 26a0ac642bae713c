"""Custom Click base class with --examples support and strict option errors.

``AutoCommitCommand`` accepts an ``examples`` parameter.  When
``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.

Usage errors (an unknown option, an extra argument) print the error
followed by the full help text and exit with status 1.
"""

from __future__ import annotations

from typing import Any, NoReturn

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class AutoCommitCommand(click.Command):
    """Click Command subclass with ``--examples`` and help-on-usage-error."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            self._exit_with_help(ctx, exc)

    @staticmethod
    def _exit_with_help(ctx: click.Context, exc: click.UsageError) -> NoReturn:
        click.echo(f"Error: {exc.format_message()}", err=True)
        click.echo(ctx.get_help(), err=True)
        ctx.exit(1)
