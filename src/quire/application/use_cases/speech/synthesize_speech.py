"""Text-to-speech use case."""

from quire.application.ports import SpeechSynthesizer
from quire.domain.exceptions import ValidationError

# Upper bound accepted by the speech endpoint in one request.
MAX_SPEECH_CHARS = 4096


class SynthesizeSpeechUseCase:
    """Narrate a piece of chunk text."""

    def __init__(self, synthesizer: SpeechSynthesizer) -> None:
        self._synthesizer = synthesizer

    async def execute(self, text: str) -> bytes:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("text is required")
        if len(text) > MAX_SPEECH_CHARS:
            raise ValidationError(f"text must be at most {MAX_SPEECH_CHARS} characters")
        return await self._synthesizer.synthesize(text)
