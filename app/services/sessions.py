from __future__ import annotations

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from app.core.errors import InvalidCredentials
from app.core.security import DUMMY_PASSWORD_HASH, verify_password
from app.models.auth import Identity
from app.services.activity import ActivityLog
from app.services.credentials import CredentialStore, to_identity

logger = logging.getLogger(__name__)


@dataclass
class _Session:
    token: str
    identity: Identity
    created_at: float
    expires_at: float


class SessionStore:
    """
    Table des sessions en mémoire : token opaque (cookie) -> Identity, TTL fixe.
    Un token inconnu ou expiré vaut "anonyme".

    on_evict(token) est appelé hors verrou pour chaque session retirée
    (expiration ou destroy), ce qui libère l'état rattaché au token (quiz).
    """

    def __init__(
        self,
        ttl_seconds: int = 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
        on_evict: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._sessions: Dict[str, _Session] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._on_evict = on_evict
        self._lock = threading.Lock()

    def create(self, identity: Identity) -> str:
        # chaque login balaie les sessions expirées jamais revues
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        now = self._clock()
        with self._lock:
            self._sessions[token] = _Session(
                token=token,
                identity=identity,
                created_at=now,
                expires_at=now + self._ttl_seconds,
            )
        return token

    def resolve(self, token: Optional[str]) -> Optional[Identity]:
        if not token:
            return None
        with self._lock:
            sess = self._sessions.get(token)
            if not sess:
                return None
            # TTL
            expired = self._clock() >= sess.expires_at
            if expired:
                del self._sessions[token]
        if expired:
            self._evicted([token])
            return None
        return sess.identity

    def destroy(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            removed = self._sessions.pop(token, None) is not None
        if removed:
            self._evicted([token])
        return removed

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            dead = [t for t, s in self._sessions.items() if now >= s.expires_at]
            for t in dead:
                del self._sessions[t]
        self._evicted(dead)
        return len(dead)

    def _evicted(self, tokens: List[str]) -> None:
        if self._on_evict is None:
            return
        for t in tokens:
            self._on_evict(t)

    def __len__(self) -> int:
        return len(self._sessions)


class SessionGate:
    """
    Login / logout au-dessus du CredentialStore et de la table des sessions.
    """

    def __init__(self, credentials: CredentialStore, sessions: SessionStore, activity: ActivityLog) -> None:
        self.credentials = credentials
        self.sessions = sessions
        self.activity = activity

    def login(self, email: str, password: str) -> tuple[str, Identity]:
        record = self.credentials.find_by_email(email)
        # email inconnu : on vérifie quand même, contre un hash factice (pas d'énumération par le temps)
        password_hash = record.get("passwordHash", "") if record else DUMMY_PASSWORD_HASH
        password_ok = verify_password(password, password_hash)
        if not record or not password_ok:
            logger.warning("login rejected")
            raise InvalidCredentials()

        identity = to_identity(record)
        token = self.sessions.create(identity)
        self.activity.record(identity, "login", {"email": identity.email})
        logger.info("login ok user=%s", identity.id)
        return token, identity

    def logout(self, token: Optional[str]) -> None:
        # idempotent : pas d'erreur si déjà déconnecté
        if self.sessions.destroy(token):
            logger.info("session closed")
