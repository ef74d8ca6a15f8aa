"""The command-line interface for gitscribe."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gitscribe.config import safe_load_config
from gitscribe.repository import Repository
from gitscribe.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "Write, remove and rename files in a git working tree, one commit each."


def _launch(
    app: App,
    tokens: tuple[str, ...],
    *,
    verbose: bool,
    config: Path | None,
    repo: Path | None,
) -> None:
    # Per-repository config lives in the git dir, so find the root first
    start = repo if repo is not None else Path.cwd()
    root = Repository.find_repository_root(start) if start.is_dir() else None

    overrides: dict[str, object] | None = None
    if verbose:
        overrides = {"logging": {"level": "info", "format": "text"}}

    # A broken source is reported on stderr and replaced by defaults
    loaded_config, _ = safe_load_config(
        root, config_path=config, overrides=overrides
    )

    cli_logger = create_cli_logger(
        level=loaded_config.logging.level.value,
        log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
        log_file=loaded_config.logging.file,
        command=tokens[0] if tokens else "",
    )

    ctx = CLIContext(
        config=loaded_config,
        verbose=verbose,
        repo_path=repo,
        logger=cli_logger,
    )
    CLIContext.set_current(ctx)

    try:
        app(tokens)
    finally:
        CLIContext.reset()


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gitscribe",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        repo: Annotated[
            Path | None,
            Parameter(name="--repo", help="Path inside the repository to use"),
        ] = None,
    ) -> None:
        """Launch gitscribe with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output and info-level logging.
            config: Explicit path to config file.
            repo: Path inside the repository (defaults to the working directory).
        """
        _launch(app, tokens, verbose=verbose, config=config, repo=repo)

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `gitscribe` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
