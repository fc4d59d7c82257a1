"""In-memory session storage keyed by the challenge interaction id."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Protocol

from rpsbot.backend.models import Participant, Session

logger = logging.getLogger(__name__)

DEFAULT_CLAIM_LEASE_SECONDS = 30.0


class SessionStore(Protocol):
    def create(self, session_id: str, challenger: Participant) -> Session:
        """Insert an open session, replacing any previous one with the same id."""

    def get(self, session_id: str) -> Session | None:
        """Return the open session or None."""

    def submit_response(self, session_id: str, responder: Participant) -> Session | None:
        """Claim an open session for finalization and return it with the responder filled in."""

    def release(self, session_id: str) -> None:
        """Return a claimed session to the open state."""

    def remove(self, session_id: str) -> None:
        """Delete the entry; absent ids are ignored."""

    def remove_claimed(self, session_id: str) -> bool:
        """Delete the entry only while it is still claimed."""

    def sweep_expired(self) -> list[str]:
        """Drop sessions older than the configured time to live."""


@dataclass
class InMemorySessionStore:
    """Mapping of open sessions guarded by a single lock.

    ``submit_response`` claims a session instead of deleting it. The claim is
    a lease: if the claimant never finalizes (its response was not
    delivered), the session becomes open again after ``claim_lease_seconds``
    and a retried submission can resolve it.
    """

    ttl_seconds: float = 0.0
    claim_lease_seconds: float = DEFAULT_CLAIM_LEASE_SECONDS
    clock: Callable[[], float] = time.monotonic
    _sessions: dict[str, Session] = field(default_factory=dict, init=False, repr=False)
    _claims: dict[str, float] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def create(self, session_id: str, challenger: Participant) -> Session:
        session = Session(session_id=session_id, challenger=challenger, created_at=self.clock())
        with self._lock:
            if session_id in self._sessions:
                logger.warning("session_overwritten session_id=%s", session_id)
            self._sessions[session_id] = session
            self._claims.pop(session_id, None)
        return session

    def _is_claimed(self, session_id: str) -> bool:
        # Caller holds the lock.
        claimed_at = self._claims.get(session_id)
        if claimed_at is None:
            return False
        if self.clock() - claimed_at >= self.claim_lease_seconds:
            del self._claims[session_id]
            logger.warning("claim_lease_expired session_id=%s", session_id)
            return False
        return True

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            if self._is_claimed(session_id):
                return None
            return self._sessions.get(session_id)

    def submit_response(self, session_id: str, responder: Participant) -> Session | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or self._is_claimed(session_id):
                return None
            self._claims[session_id] = self.clock()
            return replace(session, responder=responder)

    def release(self, session_id: str) -> None:
        with self._lock:
            self._claims.pop(session_id, None)

    def remove(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
            self._claims.pop(session_id, None)

    def remove_claimed(self, session_id: str) -> bool:
        with self._lock:
            if session_id not in self._claims:
                return False
            del self._claims[session_id]
            self._sessions.pop(session_id, None)
            return True

    def sweep_expired(self) -> list[str]:
        if self.ttl_seconds <= 0:
            return []
        cutoff = self.clock() - self.ttl_seconds
        with self._lock:
            expired = [sid for sid, session in self._sessions.items() if session.created_at <= cutoff]
            for session_id in expired:
                del self._sessions[session_id]
                self._claims.pop(session_id, None)
        if expired:
            logger.info("sessions_expired count=%s", len(expired))
        return expired


def create_store(ttl_seconds: float = 0.0, claim_lease_seconds: float = DEFAULT_CLAIM_LEASE_SECONDS) -> SessionStore:
    return InMemorySessionStore(ttl_seconds=ttl_seconds, claim_lease_seconds=claim_lease_seconds)
