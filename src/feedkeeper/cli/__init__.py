"""CLI for feedkeeper."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from feedkeeper.cli.commands import show as _show_module  # noqa: F401
from feedkeeper.cli.commands import status as _status_module  # noqa: F401
from feedkeeper.cli.main import app, main


__all__ = ["app", "main"]
