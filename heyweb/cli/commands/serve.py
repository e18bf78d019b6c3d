"""Serve command - run the HeyWeb backend."""

import typer
import uvicorn


def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address."),
    port: int = typer.Option(8000, "--port", help="Bind port."),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes."),
) -> None:
    """Run the backend proxy (chat, summarize, translate)."""
    uvicorn.run("heyweb.main:app", host=host, port=port, reload=reload)
