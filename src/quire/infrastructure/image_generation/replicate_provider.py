"""Replicate text-to-image provider."""

import asyncio
import logging
import secrets
import time
from pathlib import Path, PurePosixPath

import httpx

from quire.domain.exceptions import UpstreamServiceError
from quire.domain.value_objects import ImageSettings

logger = logging.getLogger(__name__)

_PENDING_STATUSES = frozenset({"starting", "processing"})


def build_prediction_input(
    prompt: str,
    settings: ImageSettings,
    character_reference_url: str | None = None,
) -> dict[str, object]:
    """Model input for one illustration. Manuscript prompt is prefixed to the chunk prompt."""
    full_prompt = " ".join(p for p in (settings.prompt.strip(), prompt.strip()) if p)
    payload: dict[str, object] = {
        "prompt": full_prompt,
        "seed": settings.seed,
        "aspect_ratio": settings.aspect_ratio,
    }
    if settings.image_reference_url:
        payload["image_reference_url"] = settings.image_reference_url
        payload["image_reference_weight"] = settings.image_reference_weight
    if settings.style_reference_url:
        payload["style_reference_url"] = settings.style_reference_url
        payload["style_reference_weight"] = settings.style_reference_weight
    if character_reference_url:
        payload["character_reference_url"] = character_reference_url
    return payload


class ReplicateImageProvider:
    """Runs a Replicate model prediction, downloads the output and stores it in images_dir."""

    def __init__(
        self,
        api_token: str,
        images_dir: Path,
        model: str = "luma/photon",
        base_url: str = "https://api.replicate.com/v1",
        poll_interval: float = 1.0,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_token = api_token
        self._images_dir = images_dir
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._poll_interval = poll_interval
        self._timeout = timeout
        self._transport = transport

    async def generate(
        self,
        prompt: str,
        settings: ImageSettings,
        character_reference_url: str | None = None,
    ) -> str:
        """Generate an image and return its public path (/images/<file>)."""
        if not self._api_token:
            raise UpstreamServiceError("Image generation is not configured")
        headers = {"Authorization": f"Bearer {self._api_token}"}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                r = await client.post(
                    f"{self._base_url}/models/{self._model}/predictions",
                    headers={**headers, "Prefer": "wait"},
                    json={"input": build_prediction_input(prompt, settings, character_reference_url)},
                )
                if r.status_code >= 400:
                    raise UpstreamServiceError(f"Failed to generate image: {r.text}")
                prediction = r.json()

                while prediction.get("status") in _PENDING_STATUSES:
                    await asyncio.sleep(self._poll_interval)
                    r = await client.get(
                        f"{self._base_url}/predictions/{prediction['id']}", headers=headers
                    )
                    if r.status_code >= 400:
                        raise UpstreamServiceError("Failed to check prediction status")
                    prediction = r.json()
                    logger.debug(
                        "Prediction %s status: %s", prediction.get("id"), prediction.get("status")
                    )

                output = prediction.get("output")
                if prediction.get("status") == "failed" or not output:
                    reason = prediction.get("error") or "No output received"
                    raise UpstreamServiceError(f"Image generation failed: {reason}")
                image_url = output[0] if isinstance(output, list) else output

                download = await client.get(image_url)
                if download.status_code >= 400:
                    raise UpstreamServiceError("Failed to download image")
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamServiceError(f"Image generation request failed: {e}") from e

        self._images_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}.png"
        (self._images_dir / filename).write_bytes(download.content)
        logger.info("Image saved to %s", self._images_dir / filename)
        return f"/images/{filename}"

    async def discard(self, local_path: str) -> None:
        """Delete a file previously returned by generate()."""
        path = self._images_dir / PurePosixPath(local_path).name
        path.unlink(missing_ok=True)
        logger.info("Discarded unrecorded image %s", path)
