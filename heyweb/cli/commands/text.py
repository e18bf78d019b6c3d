"""Summarize and translate commands."""

from pathlib import Path
from typing import Optional

import typer

from heyweb.cli._globals import get_global_config
from heyweb.cli.client import APIClient, APIError
from heyweb.cli.renderer import print_json, render_error, render_summary, render_translation


def _read_text(text: Optional[str], file: Optional[Path]) -> str:
    if file is not None:
        return file.read_text(encoding="utf-8")
    if text:
        return text
    render_error("Provide TEXT or --file.")
    raise typer.Exit(code=2)


def _post(path: str, payload: dict) -> dict:
    config = get_global_config()
    try:
        with APIClient(base_url=config.api_base, timeout=config.timeout, retry_times=config.retry_times) as client:
            return client.post(path, json=payload)
    except APIError as e:
        render_error(e.user_friendly_message())
        raise typer.Exit(code=1)


def summarize(
    text: Optional[str] = typer.Argument(None, help="Text to summarize."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Read text from a file."),
    max_length: int = typer.Option(300, "--max-length", help="Summary length limit in words."),
    key_points: bool = typer.Option(True, "--key-points/--no-key-points", help="Ask for key points."),
) -> None:
    """Summarize text through the backend."""
    data = _post(
        "/api/summarize",
        {"text": _read_text(text, file), "maxLength": max_length, "includeKeyPoints": key_points},
    )
    if get_global_config().output_format == "json":
        print_json(data)
    else:
        render_summary(data)


def translate(
    text: Optional[str] = typer.Argument(None, help="Text to translate."),
    to: str = typer.Option(..., "--to", "-t", help="Target language, e.g. Spanish."),
    source: Optional[str] = typer.Option(None, "--from", help="Source language (auto-detected when omitted)."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Read text from a file."),
) -> None:
    """Translate text through the backend."""
    payload = {"text": _read_text(text, file), "targetLanguage": to}
    if source:
        payload["sourceLanguage"] = source
    data = _post("/api/translate", payload)
    if get_global_config().output_format == "json":
        print_json(data)
    else:
        render_translation(data)
