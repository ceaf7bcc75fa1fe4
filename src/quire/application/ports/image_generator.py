"""Image generator port - text-to-image API."""

from typing import Protocol

from quire.domain.value_objects import ImageSettings


class ImageGenerator(Protocol):
    """Port for generating an illustration and storing it locally.

    Returns the public path of the stored file (``/images/<name>``).
    """

    async def generate(
        self,
        prompt: str,
        settings: ImageSettings,
        character_reference_url: str | None = None,
    ) -> str: ...

    async def discard(self, local_path: str) -> None:
        """Remove a stored image that could not be recorded."""
        ...
