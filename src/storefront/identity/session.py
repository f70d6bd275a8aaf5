"""Session aggregate: server-side record behind the session cookie.

The session token doubles as the aggregate identity, so resolving a cookie
is a single ``get``. Sessions expire after ``session_ttl_hours`` and are
revoked on logout. Revoked and expired rows stay until
``purge_sessions`` deletes them.
"""

import secrets
from datetime import UTC, datetime, timedelta

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import storefront
from storefront.identity.events import SessionEnded, SessionStarted
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _aware(moment: datetime) -> datetime:
    # Some providers hand datetimes back without tzinfo
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


@storefront.aggregate
class Session:
    user_id = Identifier(required=True)
    user_agent = String(max_length=500)
    created_at = DateTime(required=True)
    expires_at = DateTime(required=True)
    revoked_at = DateTime()

    @classmethod
    def open(cls, user_id, ttl_hours, user_agent=None):
        now = datetime.now(UTC)
        session = cls(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            user_agent=user_agent,
            created_at=now,
            expires_at=now + timedelta(hours=ttl_hours),
        )
        session.raise_(
            SessionStarted(
                session_id=session.id,
                user_id=str(user_id),
                expires_at=session.expires_at,
            )
        )
        return session

    def is_active(self, at: datetime | None = None) -> bool:
        moment = at or datetime.now(UTC)
        return self.revoked_at is None and _aware(self.expires_at) > moment

    def revoke(self):
        if self.revoked_at is not None:
            return
        now = datetime.now(UTC)
        self.revoked_at = now
        self.raise_(SessionEnded(session_id=self.id, user_id=str(self.user_id), ended_at=now))


@storefront.command(part_of="Session")
class StartSession:
    user_id = Identifier(required=True)
    user_agent = String(max_length=500)


@storefront.command(part_of="Session")
class EndSession:
    session_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Session)
class SessionHandler:
    @handle(StartSession)
    def start_session(self, command):
        session = Session.open(
            user_id=command.user_id,
            ttl_hours=config.session_ttl_hours(),
            user_agent=command.user_agent,
        )
        current_domain.repository_for(Session).add(session)
        logger.info("Session started", user_id=str(command.user_id))
        return session.id

    @handle(EndSession)
    def end_session(self, command):
        repo = current_domain.repository_for(Session)
        try:
            session = repo.get(command.session_id)
        except ObjectNotFoundError:
            # Logging out twice is harmless
            return
        session.revoke()
        repo.add(session)
        logger.info("Session ended", user_id=str(session.user_id))


@storefront.repository(part_of=Session)
class SessionRepository:
    def stale(self, at: datetime) -> list[Session]:
        """Sessions that no longer resolve as of ``at``: revoked or expired."""
        return [s for s in self._dao.query.limit(None).all().items if not s.is_active(at)]


def resolve_session(token: str | None) -> Session | None:
    """Active session for a cookie value, or ``None``."""
    if not token:
        return None
    try:
        session = current_domain.repository_for(Session).get(token)
    except ObjectNotFoundError:
        return None
    return session if session.is_active() else None


def purge_sessions(at: datetime | None = None) -> int:
    """Delete revoked and expired sessions; returns how many were removed."""
    repo = current_domain.repository_for(Session)
    stale = repo.stale(at or datetime.now(UTC))
    for session in stale:
        repo._dao.delete(session)
    logger.info("Sessions purged", count=len(stale))
    return len(stale)
