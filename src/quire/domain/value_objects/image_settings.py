"""Per-manuscript image generation settings."""

from dataclasses import asdict, dataclass, fields

from quire.domain.exceptions import ValidationError


@dataclass(frozen=True)
class ImageSettings:
    """Parameters passed to the image generation model for every chunk."""

    seed: int = 469
    prompt: str = ""
    aspect_ratio: str = "9:16"
    image_reference_url: str | None = None
    style_reference_url: str | None = None
    image_reference_weight: float = 0.85
    style_reference_weight: float = 0.85

    def __post_init__(self) -> None:
        if isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed <= 0:
            raise ValidationError("seed must be a positive integer")
        for name in ("image_reference_weight", "style_reference_weight"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"{name} must be a number")
            if not 0 <= value <= 1:
                raise ValidationError(f"{name} must be between 0 and 1")

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "ImageSettings":
        """Build settings from stored/request JSON, ignoring unknown keys."""
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError("image_settings must be an object")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
