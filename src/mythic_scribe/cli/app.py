from typing import Optional

import typer

from mythic_scribe.config import get_config
from mythic_scribe.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import mythic_scribe

        typer.echo(f"Mythic Scribe version: {mythic_scribe.__version__}")
        raise typer.Exit()


app = typer.Typer(name="mythic-scribe")


@app.callback()
def app_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr output",
        envvar="MYTHIC_SCRIBE_LOG_LEVEL",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Mythic Scribe - context resolution for MythicMobs scripts."""
    setup_logging(log_level or get_config().log_level)
