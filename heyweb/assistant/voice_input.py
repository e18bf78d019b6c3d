"""Microphone capture and recognition-error reporting."""

from __future__ import annotations

from typing import Any

from heyweb.core.logger import get_logger

logger = get_logger("heyweb.voice_input")

RECOGNITION_MESSAGES = {
    "not-allowed": "Microphone access denied. Please allow microphone access and try again.",
    "no-speech": "No speech detected.",
    "audio-capture": "Audio capture error. Please check your microphone and try again.",
    "network": "Network error. Please check your internet connection.",
}


def describe_recognition_error(code: str) -> str:
    return RECOGNITION_MESSAGES.get(code, f"Speech recognition error: {code}")


class SpeechCaptureError(Exception):
    def __init__(self, code: str, detail: str = "") -> None:
        super().__init__(detail or code)
        self.code = code


class MicrophoneListener:
    """One-shot capture with the SpeechRecognition package."""

    def __init__(self, timeout: float = 5.0, phrase_time_limit: float = 15.0, language: str = "en-US") -> None:
        import speech_recognition as sr

        self._sr = sr
        self.recognizer: Any = sr.Recognizer()
        self.timeout = timeout
        self.phrase_time_limit = phrase_time_limit
        self.language = language

    def capture(self) -> str:
        sr = self._sr
        try:
            with sr.Microphone() as source:
                self.recognizer.adjust_for_ambient_noise(source, duration=0.3)
                audio = self.recognizer.listen(
                    source, timeout=self.timeout, phrase_time_limit=self.phrase_time_limit
                )
        except sr.WaitTimeoutError as exc:
            raise SpeechCaptureError("no-speech", str(exc)) from exc
        except (OSError, AttributeError) as exc:
            # AttributeError: PyAudio missing or no input device.
            raise SpeechCaptureError("audio-capture", str(exc)) from exc

        try:
            return self.recognizer.recognize_google(audio, language=self.language)
        except sr.UnknownValueError as exc:
            raise SpeechCaptureError("no-speech", "speech was unintelligible") from exc
        except sr.RequestError as exc:
            raise SpeechCaptureError("network", str(exc)) from exc
