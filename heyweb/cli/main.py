"""
HeyWeb CLI entry point.

Talks to the HeyWeb backend for chat and text tools and drives local pages
with the automation executor.
"""

import sys

import typer

from heyweb.core.env_loader import load_project_env

load_project_env()

from heyweb.cli._globals import set_global_config
from heyweb.cli.commands import page, repl, serve, text
from heyweb.cli.config import get_config
from heyweb.core.logger import setup_logging


def config_callback(
    api_base: str = typer.Option(
        None,
        "--api-base",
        help="Backend API base URL (e.g. http://127.0.0.1:8000). Overrides HEYWEB_API_BASE.",
        envvar="HEYWEB_API_BASE",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON."),
    timeout: int = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds. Overrides HEYWEB_CLI_TIMEOUT.",
        envvar="HEYWEB_CLI_TIMEOUT",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Log level for heyweb loggers.",
        envvar="HEYWEB_LOG_LEVEL",
    ),
) -> None:
    """Global options shared by every command."""
    setup_logging(log_level)
    config = get_config(
        api_base=api_base,
        timeout=timeout,
        output_format="json" if json_output else None,  # type: ignore[arg-type]
    )
    set_global_config(config)


app = typer.Typer(
    name="heyweb",
    help="HeyWeb: voice-first assistant for the web",
    no_args_is_help=True,
    callback=config_callback,
)

app.command()(serve.serve)
app.command()(repl.repl)
app.command()(text.summarize)
app.command()(text.translate)
app.command(name="page")(page.page)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        print("\n[ABORTED] Aborted by user.", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    main()
