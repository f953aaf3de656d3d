"""
Session caching for authentication.

Sessions live at ``session:{user_id}:{session_id}`` so that every session of
a user can be evicted with a single pattern delete.
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.logging import get_logger
from ..cache.cache_service import CacheService
from ..cache.key_builder import build_key, escape_glob
from ..models import CacheKeyComponents, SessionData

SESSION_PREFIX = "session"
SESSION_TTL = 86400  # 24 hours


class SessionCache:
    """Session storage with a fixed 24 hour TTL."""

    def __init__(self, cache: CacheService):
        self.cache = cache
        self.logger = get_logger("blogs_cache.patterns.session")

    def _make_key(self, user_id: str, session_id: str) -> str:
        return build_key(CacheKeyComponents(service=SESSION_PREFIX, resource=user_id, id=session_id))

    async def get(self, user_id: str, session_id: str) -> Optional[SessionData]:
        """Get session data, or ``None`` if it does not exist."""
        data = await self.cache.get(self._make_key(user_id, session_id))
        if data is None:
            return None

        try:
            return SessionData.model_validate(data)
        except PydanticValidationError as e:
            self.logger.warning("Discarding malformed session", user_id=user_id, session_id=session_id, error=str(e))
            return None

    async def set(self, session_id: str, data: SessionData) -> bool:
        """Store session data under its owner's user id."""
        key = self._make_key(data.user_id, session_id)
        return await self.cache.set(key, data.model_dump(), SESSION_TTL)

    async def delete(self, user_id: str, session_id: str) -> bool:
        """Delete a session."""
        return await self.cache.delete(self._make_key(user_id, session_id))

    async def delete_all_for_user(self, user_id: str) -> int:
        """Delete all sessions for a user, returning how many were removed."""
        deleted = await self.cache.delete_pattern(self._make_key(escape_glob(user_id), "*"))
        self.logger.info("Deleted user sessions", user_id=user_id, count=deleted)
        return deleted

    async def refresh(self, user_id: str, session_id: str) -> bool:
        """Extend a session's expiration to the full TTL."""
        return await self.cache.expire(self._make_key(user_id, session_id), SESSION_TTL)

    async def get_ttl(self, user_id: str, session_id: str) -> int:
        """Remaining TTL of a session in seconds."""
        return await self.cache.ttl(self._make_key(user_id, session_id))
