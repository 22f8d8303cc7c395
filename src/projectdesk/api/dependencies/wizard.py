"""Wizard state store dependency.

With Redis available the snapshot lives in Redis under a random id kept in the
signed session cookie; otherwise it lives in the cookie session itself.
"""

import secrets
from typing import Annotated

from fastapi import Depends, Request

from src.projectdesk.core.config import get_settings
from src.projectdesk.core.redis import get_redis
from src.projectdesk.services.wizard import (
    RedisWizardStateStore,
    SessionWizardStateStore,
    WizardStateStore,
)

WIZARD_SESSION_ID_KEY = "wizard_session_id"


async def get_wizard_state_store(request: Request) -> WizardStateStore:
    """Get the wizard state store for the caller's session."""
    redis = await get_redis()
    if redis is None:
        return SessionWizardStateStore(request.session)

    session_id = request.session.get(WIZARD_SESSION_ID_KEY)
    if session_id is None:
        session_id = secrets.token_urlsafe(32)
        request.session[WIZARD_SESSION_ID_KEY] = session_id

    settings = get_settings()
    return RedisWizardStateStore(redis, session_id, settings.wizard_session_ttl_seconds)


WizardStore = Annotated[WizardStateStore, Depends(get_wizard_state_store)]
