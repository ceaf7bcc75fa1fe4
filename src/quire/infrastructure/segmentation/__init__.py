"""Markdown segmentation."""

from quire.infrastructure.segmentation.markdown_segmenter import (
    MarkdownSegmenter,
    segment,
    validate_markdown,
)

__all__ = ["MarkdownSegmenter", "segment", "validate_markdown"]
