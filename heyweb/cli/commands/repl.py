"""REPL command - talk to the assistant by keyboard or microphone."""

from pathlib import Path
from typing import Optional

import typer

from heyweb.assistant.container import build_dispatcher
from heyweb.assistant.context import ContextBuilder
from heyweb.assistant.history_store import HistoryStore
from heyweb.assistant.orchestrator import ConversationOrchestrator
from heyweb.assistant.session import ConversationSession
from heyweb.assistant.speech import Pyttsx3Backend, SpeechSynthesizer, VoiceSettings
from heyweb.assistant.voice_input import MicrophoneListener
from heyweb.automation.browser import Browser, resolve_location
from heyweb.cli._globals import get_global_config
from heyweb.cli.client import APIClient
from heyweb.cli.renderer import print_json, render_assistant, render_error, render_outcomes

HELP_TEXT = """Commands:
  :voice      speak one utterance (needs --voice)
  :auto       toggle web automation
  :tabs       list open tabs
  :history    show this session's messages
  :export     write heyweb-conversation.json
  :clear      clear history
  :quit       exit"""


def _print_tabs(browser: Browser) -> None:
    for tab in browser.tabs.values():
        marker = "*" if tab.id == browser.active_tab_id else " "
        typer.echo(f" {marker} [{tab.id}] {tab.url} {tab.title}")


def repl(
    page: Optional[str] = typer.Option(None, "--page", "-p", help="HTML file or URL to open as the active tab."),
    automation: bool = typer.Option(True, "--automation/--no-automation", help="Allow actions on the active page."),
    voice: bool = typer.Option(False, "--voice", help="Speak replies and enable :voice capture."),
    session_id: Optional[str] = typer.Option(None, "--session-id", "-s", help="Resume a stored session."),
    rate: float = typer.Option(1.0, "--rate", help="Speech rate multiplier."),
    export_dir: Path = typer.Option(Path("."), "--export-dir", help="Where :export writes the conversation."),
) -> None:
    """Interactive assistant session."""
    config = get_global_config()
    browser = Browser()
    if page:
        tab = browser.new_tab(resolve_location(page))
        if tab.page is None:
            render_error(f"Could not load {page}; continuing without a page.")

    settings = VoiceSettings(rate=rate)
    listener = None
    if voice:
        speaker = SpeechSynthesizer(Pyttsx3Backend(), settings)
        listener = MicrophoneListener()
    else:
        speaker = SpeechSynthesizer(settings=settings)

    session = ConversationSession(session_id=session_id, store=HistoryStore())
    client = APIClient(base_url=config.api_base, timeout=config.timeout, retry_times=config.retry_times)
    orchestrator = ConversationOrchestrator(
        api=client,
        session=session,
        dispatcher=build_dispatcher(),
        context_builder=ContextBuilder(browser, web_automation_enabled=automation),
        speaker=speaker,
        notifier=render_error,
        export_dir=export_dir,
        on_open_settings=lambda: typer.echo(HELP_TEXT),
    )

    typer.secho(f"HeyWeb session {session.session_id} ({len(session)} stored messages)", fg=typer.colors.GREEN)
    typer.echo("Type :help for commands.")
    try:
        while True:
            try:
                line = input("\nYou> ").strip()
            except EOFError:
                break
            if not line:
                continue
            if line in (":quit", ":exit", ":q"):
                break
            if line == ":help":
                typer.echo(HELP_TEXT)
                continue
            if line == ":auto":
                orchestrator.web_automation_enabled = not orchestrator.web_automation_enabled
                typer.echo(f"web automation: {'on' if orchestrator.web_automation_enabled else 'off'}")
                continue
            if line == ":tabs":
                _print_tabs(browser)
                continue
            if line == ":history":
                print_json(session.to_export())
                continue
            if line == ":export":
                typer.echo(str(session.export(export_dir / "heyweb-conversation.json")))
                continue
            if line == ":clear":
                session.clear()
                typer.echo("history cleared")
                continue

            if line == ":voice":
                if listener is None:
                    render_error("Voice capture is off; restart with --voice.")
                    continue
                typer.echo("listening...")
                result = orchestrator.listen_once(listener)
                if result is not None:
                    typer.echo(f"You said: {orchestrator.last_utterance}")
            else:
                result = orchestrator.handle_user_utterance(line)

            if result is None:
                continue
            render_assistant(result.assistant)
            render_outcomes(result.outcomes)
    finally:
        speaker.wait_idle()
        speaker.shutdown()
        client.close()
