"""Order bookkeeping for the chunk sequence of one manuscript."""

from collections.abc import Iterable

from quire.domain.exceptions import ValidationError
from quire.domain.value_objects import Direction

MERGE_SEPARATOR = "\n\n"


def merge_texts(first: str, second: str) -> str:
    """Join two adjacent chunk texts with a blank line."""
    return f"{first}{MERGE_SEPARATOR}{second}"


def split_text(text: str, split_point: int) -> tuple[str, str]:
    """Split text at split_point. Both halves must be non-empty."""
    if isinstance(split_point, bool) or not isinstance(split_point, int):
        raise ValidationError("split_point must be an integer")
    if not 0 < split_point < len(text):
        raise ValidationError(
            f"split_point must be between 1 and {len(text) - 1}, got {split_point}"
        )
    return text[:split_point], text[split_point:]


def neighbour_order(order: int, direction: Direction, count: int) -> int | None:
    """Order of the adjacent chunk in direction, or None at the sequence boundary."""
    target = order - 1 if direction == Direction.UP else order + 1
    if target < 0 or target >= count:
        return None
    return target


def is_contiguous(orders: Iterable[int]) -> bool:
    """True when orders are exactly 0..N-1 without duplicates."""
    values = list(orders)
    return sorted(values) == list(range(len(values)))
