"""OpenAI text-to-speech provider."""

import openai
from openai import AsyncOpenAI

from quire.domain.exceptions import UpstreamServiceError


class OpenAISpeechProvider:
    """Speech synthesizer using the OpenAI audio API."""

    def __init__(
        self,
        api_key: str,
        model: str = "tts-1",
        voice: str = "alloy",
        base_url: str | None = None,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key or "unset", base_url=base_url)
        self._configured = bool(api_key)
        self._model = model
        self._voice = voice

    async def synthesize(self, text: str) -> bytes:
        """Return MP3 audio for text."""
        if not self._configured:
            raise UpstreamServiceError("Speech synthesis is not configured")
        try:
            response = await self._client.audio.speech.create(
                model=self._model,
                voice=self._voice,
                input=text,
                response_format="mp3",
            )
        except openai.OpenAIError as e:
            raise UpstreamServiceError(f"Failed to generate speech: {e}") from e
        return response.content
