"""Export formats."""

from enum import StrEnum


class ExportFormat(StrEnum):
    """Document formats a manuscript can be exported to."""

    MARKDOWN = "markdown"
    EPUB = "epub"
    DOCX = "docx"

    @property
    def extension(self) -> str:
        return "md" if self is ExportFormat.MARKDOWN else self.value
