# src/sessions/redis_backend.py - v1
"""Redis-based session backend (SESSION_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for multi-instance deployments; expiry is delegated to Redis
through SETEX, so purge_expired has nothing to do.
"""

from __future__ import annotations

import json
import logging

from httpstore.sessions.base_session_backend import BaseSessionBackend

logger = logging.getLogger(__name__)

_KEY_PREFIX = "httpstore:session:"


class RedisSessionBackend(BaseSessionBackend):
    """Redis-backed session store."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)

    def load(self, session_id: str) -> dict[str, str] | None:
        data = self._client.get(f"{_KEY_PREFIX}{session_id}")
        if data is None:
            return None
        try:
            return dict(json.loads(data))
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning("Failed to deserialize session %s: %s", session_id, e)
            return None

    def save(self, session_id: str, data: dict[str, str], ttl: int) -> None:
        key = f"{_KEY_PREFIX}{session_id}"
        payload = json.dumps(data)
        if ttl > 0:
            self._client.setex(key, ttl, payload)
        else:
            self._client.set(key, payload)

    def delete(self, session_id: str) -> None:
        self._client.delete(f"{_KEY_PREFIX}{session_id}")

    def purge_expired(self) -> int:
        return 0

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
