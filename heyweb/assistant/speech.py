"""Text-to-speech with cancel-then-restart semantics.

Speaking always interrupts whatever is currently being said; queued but
unstarted utterances are dropped. Audio runs on one worker thread so the
caller never blocks on playback.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from heyweb.core.logger import get_logger

logger = get_logger("heyweb.speech")

BASE_WORDS_PER_MINUTE = 200


@dataclass
class VoiceSettings:
    rate: float = 1.0
    pitch: float = 1.0
    voice: Optional[str] = None


class SpeechBackend(Protocol):
    def speak(self, text: str, settings: VoiceSettings, stop_event: threading.Event) -> None:
        ...

    def stop(self) -> None:
        ...


class SilentBackend:
    """Records utterances instead of playing them (text-only sessions)."""

    def __init__(self) -> None:
        self.spoken: list[str] = []
        self.stops = 0

    def speak(self, text: str, settings: VoiceSettings, stop_event: threading.Event) -> None:
        self.spoken.append(text)

    def stop(self) -> None:
        self.stops += 1


class Pyttsx3Backend:
    def __init__(self) -> None:
        import pyttsx3

        self._engine: Any = pyttsx3.init()
        self._voice_ids = {
            getattr(v, "name", ""): v.id for v in (self._engine.getProperty("voices") or [])
        }

    def speak(self, text: str, settings: VoiceSettings, stop_event: threading.Event) -> None:
        if stop_event.is_set():
            return
        self._engine.setProperty("rate", int(BASE_WORDS_PER_MINUTE * settings.rate))
        if settings.voice and settings.voice in self._voice_ids:
            self._engine.setProperty("voice", self._voice_ids[settings.voice])
        self._engine.say(text)
        self._engine.runAndWait()

    def stop(self) -> None:
        try:
            self._engine.stop()
        except RuntimeError as exc:
            logger.debug("pyttsx3 stop ignored: %s", exc)


class SpeechSynthesizer:
    def __init__(self, backend: SpeechBackend | None = None, settings: VoiceSettings | None = None) -> None:
        self.backend = backend or SilentBackend()
        self.settings = settings or VoiceSettings()
        self._queue: "queue.Queue[tuple[int, Optional[str]]]" = queue.Queue()
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._generation = 0
        self._worker: threading.Thread | None = None

    def _ensure_worker(self) -> None:
        if self._worker is None or not self._worker.is_alive():
            self._worker = threading.Thread(target=self._run, name="heyweb-tts", daemon=True)
            self._worker.start()

    def _run(self) -> None:
        while True:
            generation, text = self._queue.get()
            try:
                if text is None:
                    return
                with self._lock:
                    if generation != self._generation:
                        continue
                    self._stop_event.clear()
                try:
                    self.backend.speak(text, self.settings, self._stop_event)
                except Exception as exc:
                    logger.warning("speech backend failed: %s", exc)
            finally:
                self._queue.task_done()

    def _drain(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return
            self._queue.task_done()

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            self._stop_event.set()
        self._drain()
        self.backend.stop()

    def speak(self, text: str) -> None:
        if not text or not text.strip():
            return
        self.cancel()
        self._ensure_worker()
        self._queue.put((self._generation, text))

    def wait_idle(self) -> None:
        self._queue.join()

    def shutdown(self) -> None:
        self.cancel()
        if self._worker is not None and self._worker.is_alive():
            self._queue.put((self._generation, None))
            self._worker.join(timeout=2.0)
        self._worker = None
