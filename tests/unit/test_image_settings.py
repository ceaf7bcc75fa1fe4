"""Unit tests for ImageSettings."""

import pytest

from quire.domain.exceptions import ValidationError
from quire.domain.value_objects import ImageSettings


def test_defaults() -> None:
    settings = ImageSettings()
    assert settings.seed == 469
    assert settings.aspect_ratio == "9:16"
    assert settings.image_reference_weight == 0.85
    assert settings.style_reference_weight == 0.85
    assert settings.image_reference_url is None


def test_from_dict_ignores_unknown_keys() -> None:
    settings = ImageSettings.from_dict({"seed": 7, "prompt": "ink", "colour": "red"})
    assert settings.seed == 7
    assert settings.prompt == "ink"


def test_from_dict_empty_returns_defaults() -> None:
    assert ImageSettings.from_dict(None) == ImageSettings()
    assert ImageSettings.from_dict({}) == ImageSettings()


def test_from_dict_rejects_non_object() -> None:
    with pytest.raises(ValidationError):
        ImageSettings.from_dict(["seed", 1])


@pytest.mark.parametrize("seed", [0, -5, "12", True, 1.5])
def test_seed_must_be_positive_integer(seed) -> None:
    with pytest.raises(ValidationError):
        ImageSettings(seed=seed)


@pytest.mark.parametrize("weight", [-0.1, 1.01, "0.5", None])
def test_weights_must_be_in_unit_interval(weight) -> None:
    with pytest.raises(ValidationError):
        ImageSettings(image_reference_weight=weight)


def test_weight_bounds_accepted() -> None:
    settings = ImageSettings(image_reference_weight=0, style_reference_weight=1)
    assert settings.to_dict()["style_reference_weight"] == 1
