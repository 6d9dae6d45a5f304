"""Minimal SSML builder for spoken responses."""
from __future__ import annotations

from typing import List
from xml.sax.saxutils import escape, quoteattr


class SpeechBuilder:
    """Accumulate text, pauses and audio clips into one ``<speak>`` document."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def add_text(self, text: str | None) -> "SpeechBuilder":
        if text:
            self._parts.append(escape(text))
        return self

    def add_break(self, seconds: float) -> "SpeechBuilder":
        self._parts.append(f'<break time="{seconds:g}s"/>')
        return self

    def add_audio(self, url: str | None) -> "SpeechBuilder":
        if url:
            self._parts.append(f"<audio src={quoteattr(url)}/>")
        return self

    def is_empty(self) -> bool:
        return not self._parts

    def build(self) -> str:
        return "<speak>" + " ".join(self._parts) + "</speak>"


def plain_speech(text: str) -> str:
    return SpeechBuilder().add_text(text).build()


__all__ = ["SpeechBuilder", "plain_speech"]
