"""Session-scoped storage for the wizard state snapshot.

The snapshot is one JSON blob under a fixed key. Writes replace the whole
blob, so concurrent requests for the same session are last-writer-wins.
"""

from collections.abc import MutableMapping
from typing import Any, Protocol

from pydantic import ValidationError
from redis.asyncio import Redis

from src.projectdesk.core.logging import get_logger
from src.projectdesk.schemas.wizard import WizardState

logger = get_logger(__name__)

WIZARD_STATE_KEY = "project_wizard"


class WizardStateStore(Protocol):
    async def load(self) -> WizardState | None: ...

    async def save(self, state: WizardState) -> None: ...

    async def clear(self) -> None: ...


def _decode(raw: str | bytes | None) -> WizardState | None:
    if raw is None:
        return None
    try:
        return WizardState.from_json(raw)
    except ValidationError as e:
        # An unreadable slot is treated like an expired one
        logger.warning("Discarding unreadable wizard state", error=str(e))
        return None


class SessionWizardStateStore:
    """Keeps the snapshot inside the signed cookie session."""

    def __init__(self, session: MutableMapping[str, Any], key: str = WIZARD_STATE_KEY):
        self.session = session
        self.key = key

    async def load(self) -> WizardState | None:
        return _decode(self.session.get(self.key))

    async def save(self, state: WizardState) -> None:
        self.session[self.key] = state.to_json()

    async def clear(self) -> None:
        self.session.pop(self.key, None)


class RedisWizardStateStore:
    """Keeps the snapshot in Redis, keyed by the session's wizard id.

    The TTL slides on every read and write, so the slot expires after
    ``ttl_seconds`` of inactivity.
    """

    def __init__(
        self,
        redis: Redis,
        session_id: str,
        ttl_seconds: int,
        key_prefix: str = WIZARD_STATE_KEY,
    ):
        self.redis = redis
        self.key = f"{key_prefix}:{session_id}"
        self.ttl_seconds = ttl_seconds

    async def load(self) -> WizardState | None:
        raw = await self.redis.get(self.key)
        if raw is None:
            return None
        await self.redis.expire(self.key, self.ttl_seconds)
        return _decode(raw)

    async def save(self, state: WizardState) -> None:
        await self.redis.set(self.key, state.to_json(), ex=self.ttl_seconds)

    async def clear(self) -> None:
        await self.redis.delete(self.key)
