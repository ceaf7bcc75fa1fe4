"""Speech synthesizer port - text-to-speech API."""

from typing import Protocol


class SpeechSynthesizer(Protocol):
    """Port for narrating text. Returns MP3 bytes."""

    async def synthesize(self, text: str) -> bytes: ...
