"""Request authentication boundary.

Authentication itself happens in front of this service: the gateway
verifies the session and forwards the user id in a header. Routes that
need a user depend on ``get_current_user_id``.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from config import USER_ID_HEADER

logger = logging.getLogger(__name__)


async def get_current_user_id(request: Request) -> str:
    """Return the authenticated user id or reject the request with 401."""
    user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
    if not user_id:
        logger.info(
            "Rejected unauthenticated request to %s %s",
            request.method,
            request.url.path,
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
