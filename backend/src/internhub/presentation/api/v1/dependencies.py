"""
FastAPI Dependencies
Caller identity
"""
from typing import Optional

from fastapi import Header, HTTPException, status


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None, description="Id of the acting user")
) -> str:
    """
    Identify the caller from the X-User-Id header

    Role checks happen in the services; this only requires that an id is present.

    Usage:
        @router.get("/mine")
        async def route(user_id: str = Depends(get_current_user_id)):
            ...
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()
