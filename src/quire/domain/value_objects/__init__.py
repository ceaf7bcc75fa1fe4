"""Domain value objects."""

from quire.domain.value_objects.direction import Direction
from quire.domain.value_objects.export_format import ExportFormat
from quire.domain.value_objects.image_settings import ImageSettings

__all__ = [
    "Direction",
    "ExportFormat",
    "ImageSettings",
]
