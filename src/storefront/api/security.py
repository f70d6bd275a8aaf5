"""Request identity: session cookie → ``Principal``, and the admin guard.

Route handlers never read the session store themselves. They declare
``Depends(current_principal)`` (or ``require_admin``) and receive an
explicit, immutable identity value.
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront import config
from storefront.identity.session import EndSession, StartSession, resolve_session
from storefront.identity.user import User
from storefront.utils.logging import bind_request_context


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of the current request."""

    user_id: str
    email: str
    is_admin: bool
    session_id: str


async def optional_principal(request: Request) -> Principal | None:
    session = resolve_session(request.cookies.get(config.session_cookie_name()))
    if session is None:
        return None

    try:
        user = current_domain.repository_for(User).get(session.user_id)
    except ObjectNotFoundError:
        return None

    bind_request_context(user_id=str(user.id))
    return Principal(
        user_id=str(user.id),
        email=user.email,
        is_admin=bool(user.is_admin),
        session_id=str(session.id),
    )


async def current_principal(principal: Principal | None = Depends(optional_principal)) -> Principal:
    if principal is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return principal


async def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    """Admin guard, applied once at router level to every /api/admin route."""
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return principal


def open_session(response: Response, user_id: str, user_agent: str | None = None) -> str:
    """Start a session for ``user_id`` and attach its cookie to ``response``."""
    token = current_domain.process(
        StartSession(user_id=user_id, user_agent=(user_agent or "")[:500] or None),
        asynchronous=False,
    )
    response.set_cookie(
        key=config.session_cookie_name(),
        value=token,
        max_age=config.session_ttl_hours() * 3600,
        httponly=True,
        secure=config.session_cookie_secure(),
        samesite="lax",
    )
    return token


def close_session(response: Response, session_id: str | None) -> None:
    if session_id:
        current_domain.process(EndSession(session_id=session_id), asynchronous=False)
    response.delete_cookie(key=config.session_cookie_name())
