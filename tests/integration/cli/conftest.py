from collections.abc import Callable, Iterator

import pytest
from rich.console import Console

from gitscribe.cli import CLIContext, create_app


@pytest.fixture(autouse=True)
def _reset_cli_context() -> Iterator[None]:
    CLIContext.reset()
    yield
    CLIContext.reset()


@pytest.fixture
def gitscribe_cli(console: Console) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code.

    Global options such as --repo go before the command name, as on the
    command line.
    """

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        """Run CLI app and return exit code (0 if no SystemExit)."""

        try:
            app.meta(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
