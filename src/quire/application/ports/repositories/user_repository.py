"""User repository port."""

from typing import Protocol

from quire.domain.entities import User


class UserRepository(Protocol):
    """Port for user persistence."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def upsert(self, user: User) -> User: ...

    async def update_display_name(self, user_id: str, display_name: str) -> User | None: ...
