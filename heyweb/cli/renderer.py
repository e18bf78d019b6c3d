"""Terminal rendering for CLI results."""

from __future__ import annotations

import json
from typing import Any, Iterable

import typer

from heyweb.assistant.dispatcher import DispatchOutcome


def print_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2, default=str))


def render_error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def render_assistant(text: str) -> None:
    typer.secho("HeyWeb: ", fg=typer.colors.CYAN, bold=True, nl=False)
    typer.echo(text)


def describe_action(action: Any) -> str:
    if getattr(action, "type", None) == "web_automation":
        parts = [action.command, action.target or action.direction or ""]
        if action.value:
            parts.append(f"= {action.value}")
        return " ".join(p for p in parts if p)
    if getattr(action, "type", None) == "search":
        return f"search {action.engine}: {action.query}"
    if getattr(action, "type", None) == "navigation":
        return f"open {action.url} ({action.target})"
    if getattr(action, "type", None) == "system":
        return action.command
    return repr(action)


def render_outcomes(outcomes: Iterable[DispatchOutcome]) -> None:
    colors = {"ok": typer.colors.GREEN, "skipped": typer.colors.YELLOW, "failed": typer.colors.RED}
    for outcome in outcomes:
        label = f"  [{outcome.status.upper()}] "
        typer.secho(label, fg=colors.get(outcome.status), nl=False)
        detail = describe_action(outcome.action)
        if outcome.error:
            detail += f" ({outcome.error})"
        elif isinstance(outcome.result, dict) and outcome.result.get("success") is False:
            detail += f" ({outcome.result.get('error', 'failed')})"
        typer.echo(detail)


def render_summary(data: dict[str, Any]) -> None:
    typer.secho("[SUMMARY]", fg=typer.colors.BLUE)
    typer.echo(data.get("summary", ""))
    key_points = data.get("keyPoints") or []
    if key_points:
        typer.echo("")
        typer.secho("[KEY POINTS]", fg=typer.colors.BLUE)
        for point in key_points:
            typer.echo(f"  - {point}")


def render_translation(data: dict[str, Any]) -> None:
    typer.secho(
        f"[{data.get('sourceLanguage', '?')} -> {data.get('targetLanguage', '?')}]",
        fg=typer.colors.BLUE,
    )
    typer.echo(data.get("translatedText", ""))
