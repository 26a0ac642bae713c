"""Root CLI command for autocommit.

Runs the whole pipeline in order: dependency, repository, server, and
model checks, then change collection, message generation, commit, and
an optional push.  Every step that fails exits with status 1; "nothing
to commit" and ``--dry-run`` exit 0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from autocommit import __version__
from autocommit.commands._base import AutoCommitCommand
from autocommit.commands._context import AppContext
from autocommit.config.models import DEFAULT_MODEL
from autocommit.config.settings import AutoCommitSettings

if TYPE_CHECKING:
    from autocommit.services.preflight import PreflightService

_EXAMPLES = f"""\
  autocommit                      # Use default model ({DEFAULT_MODEL})
  autocommit llama3.2             # Use specific model
  autocommit codellama --dry-run  # Dry run with codellama model
  autocommit -v --no-interact     # Debug logging, never prompt"""

_EPILOG = """\b
Prerequisites:
  - Ollama must be running (ollama serve)
  - Must be in a git repository"""


@click.command(
    "autocommit",
    cls=AutoCommitCommand,
    examples=_EXAMPLES,
    epilog=_EPILOG,
)
@click.version_option(version=__version__, prog_name="autocommit")
@click.argument("model", required=False)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be committed without actually committing.",
)
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    model: str | None,
    dry_run: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
) -> None:
    """Auto git commit with Ollama-generated messages.

    Sends the staged diff to a local Ollama MODEL and commits with the
    conventional commit message it produces.  If nothing is staged, all
    modified files are staged first.
    """
    settings = AutoCommitSettings.from_cli(
        config_path=config_path,
        model=model,
        dry_run=dry_run,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    run(app)


def run(app: AppContext) -> None:
    """Execute the auto-commit pipeline for an initialized context."""
    from autocommit.services.changes import ChangeService
    from autocommit.services.commit import CommitService
    from autocommit.services.message import MessageService
    from autocommit.services.preflight import PreflightService

    out = app.reporter
    tools = app.toolchain
    model = app.settings.resolved_model
    preflight = PreflightService(tools)

    out.info("Checking dependencies...")
    app.require(preflight.check_dependencies())

    out.info("Starting auto-commit process...")
    out.info(f"Using model: {model}")
    app.require(preflight.check_repository())
    app.require(preflight.check_server())
    _ensure_model(app, preflight, model)

    out.info("Analyzing git changes...")
    changes_svc = ChangeService(tools)
    staged_now = app.require(changes_svc.stage())
    if not staged_now.data["has_changes"]:
        return
    if staged_now.data["staged_all"]:
        out.info("Staged all modified files.")
    changes = app.require(changes_svc.collect())

    staged = app.require(changes_svc.stat())
    out.info("Changes to be committed:")
    out.rule()
    out.plain(staged.data["stat"])
    out.rule()

    out.info(f"Generating commit message using model: {model}")
    generated = app.require(MessageService(tools).generate(model, changes.data["text"]))
    message: str = generated.data["message"]
    if generated.data["fallback"]:
        out.warning("Model output was unusable; using fallback message.")
    out.success("Generated commit message:")
    out.message(message)

    if app.settings.dry_run:
        out.warning(f'DRY RUN: Would commit with message: "{message}"')
        out.info("Staged files that would be committed:")
        for name in staged.data["files"]:
            out.plain(name)
        return

    out.info("Committing changes...")
    commit_svc = CommitService(tools)
    committed = app.require(commit_svc.commit(message))
    if committed.data["output"]:
        out.plain(committed.data["output"])
    out.success(f'Successfully committed with message: "{message}"')

    if committed.data["has_remote"]:
        click.echo()
        if app.confirm("Push to remote repository?"):
            out.info("Pushing to remote...")
            app.require(commit_svc.push())
            out.success("Successfully pushed to remote repository.")


def _ensure_model(app: AppContext, preflight: PreflightService, model: str) -> None:
    """Offer to pull *model* when the server doesn't have it; exit 1 if declined."""
    out = app.reporter
    checked = app.require(preflight.check_model(model))
    if checked.data["available"]:
        return

    out.warning(f"Model '{model}' not found locally.")
    out.info("Available models:")
    for name in checked.data["models"] or ["(none)"]:
        out.plain(f"  {name}")

    if not app.confirm(f"Do you want to pull the model '{model}'?"):
        app.abort(f"Model '{model}' is required. Exiting.")

    out.info(f"Pulling model '{model}'...")
    app.require(preflight.pull_model(model))
    out.success(f"Pulled model '{model}'.")
