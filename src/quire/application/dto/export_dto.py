"""Export and archive DTOs."""

from dataclasses import dataclass


@dataclass
class ExportResult:
    """Compiled document ready to be sent as an attachment."""

    filename: str
    content_type: str
    data: bytes


@dataclass
class ImageBatchResult:
    """Outcome of batch image generation."""

    total_chunks: int
    generated: int
    failed: int
