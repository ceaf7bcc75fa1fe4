"""Markdown segmenter - splits a manuscript into paragraph chunks."""

from collections.abc import Iterator
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from quire.application.dto.chunk_dto import ChunkDraft

# Inline node types whose content is reading text.
_TEXT_NODE_TYPES = frozenset({"text", "code_inline"})


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    return MarkdownIt("commonmark")


def _inline_text(node: SyntaxTreeNode) -> str:
    """Concatenate the leaf text of a block's inline content with single spaces."""
    parts: list[str] = []
    for inline in node.children:
        for leaf in inline.walk():
            if leaf.type in _TEXT_NODE_TYPES and leaf.content:
                parts.append(leaf.content)
    return " ".join(" ".join(parts).split())


def _heading_depth(node: SyntaxTreeNode) -> int:
    # tag is "h1".."h6"
    return int(node.tag[1:])


class MarkdownSegmenter:
    """Chunks markdown by chapter heading and paragraph.

    Every paragraph becomes one chunk labelled with the most recent chapter
    heading (``chapter_level``, ``###`` by default). When ``section_level`` is
    set, headings of that depth label chunks with ``heading_level2``. A heading
    that is not followed by a paragraph does not produce a chunk.
    """

    def __init__(self, chapter_level: int = 3, section_level: int | None = None) -> None:
        self._chapter_level = chapter_level
        self._section_level = section_level

    def segment(self, markdown: str) -> Iterator[ChunkDraft]:
        """Yield chunk drafts in document order, orders starting at 0."""
        if not markdown or not markdown.strip():
            return
        root = SyntaxTreeNode(_parser().parse(markdown))

        order = 0
        current = ChunkDraft(order=0, text="")
        for node in root.walk(include_self=False):
            if node.type == "heading":
                depth = _heading_depth(node)
                if depth == self._chapter_level:
                    label1, label2 = _inline_text(node), None
                elif self._section_level is not None and depth == self._section_level:
                    label1, label2 = current.heading_level1, _inline_text(node)
                else:
                    continue
                if current.text:
                    yield current
                    order += 1
                current = ChunkDraft(
                    order=order, text="", heading_level1=label1, heading_level2=label2
                )
            elif node.type == "paragraph":
                if current.text:
                    yield current
                    order += 1
                current = ChunkDraft(
                    order=order,
                    text=_inline_text(node),
                    heading_level1=current.heading_level1,
                    heading_level2=current.heading_level2,
                )

        if current.text:
            yield current

    def validate(self, markdown: str) -> bool:
        """Return True when markdown parses, without keeping the result."""
        if not isinstance(markdown, str):
            return False
        try:
            _parser().parse(markdown)
        except Exception:
            return False
        return True


def segment(markdown: str) -> Iterator[ChunkDraft]:
    """Segment with the default chapter heading level."""
    return MarkdownSegmenter().segment(markdown)


def validate_markdown(markdown: str) -> bool:
    return MarkdownSegmenter().validate(markdown)
