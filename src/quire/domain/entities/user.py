"""User entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Author known to the identity provider."""

    id: str
    email: str
    created_at: datetime
    display_name: str | None = None
