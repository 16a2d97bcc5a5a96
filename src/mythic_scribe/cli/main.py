"""Main CLI entry point for mythic-scribe."""  # pragma: no cover

from mythic_scribe.cli.app import app  # pragma: no cover

# Register commands
from mythic_scribe.cli.commands import inspect  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
