"""Text-to-speech endpoint."""

import falcon.asgi

from quire.application.use_cases.speech.synthesize_speech import SynthesizeSpeechUseCase
from quire.domain.exceptions import UpstreamServiceError, ValidationError


class SpeechResource:
    """POST /v1/tts - narrate text, answer audio/mpeg."""

    def __init__(self, synthesize_speech: SynthesizeSpeechUseCase) -> None:
        self._synthesize_speech = synthesize_speech

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            text = body["text"]
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            audio = await self._synthesize_speech.execute(text)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except UpstreamServiceError as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e)}
            return

        resp.content_type = "audio/mpeg"
        resp.data = audio
        resp.status = falcon.HTTP_200
