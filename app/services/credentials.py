from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from app.core.errors import ValidationError
from app.core.security import hash_password, validate_password
from app.db.json_store import JsonStore, Record
from app.services.activity import utcnow_iso
from app.models.auth import Identity, Role

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def to_identity(record: Record) -> Identity:
    return Identity(
        id=record["id"],
        name=record.get("name") or "",
        email=record["email"],
        role=Role(record.get("role") or "user"),
    )


class CredentialStore:
    """
    Comptes utilisateurs dans users.json :
    {id, name, email, passwordHash, role, createdAt}
    """

    def __init__(self, store: JsonStore, min_password_length: int = 6) -> None:
        self.store = store
        self.min_password_length = min_password_length

    def find_by_email(self, email: str) -> Optional[Record]:
        wanted = normalize_email(email)
        if not wanted:
            return None
        for rec in self.store.read_all():
            if normalize_email(rec.get("email", "")) == wanted:
                return rec
        return None

    def all(self) -> List[Record]:
        return self.store.read_all()

    def append(self, record: Record) -> Record:
        return self.store.append(record)

    def register(self, name: str, email: str, password: str, role: Role = Role.user,
                 user_id: Optional[str] = None) -> Identity:
        name = (name or "").strip()
        email = normalize_email(email)
        if not name or not email:
            raise ValidationError("Name, email and password are required")
        if "@" not in email:
            raise ValidationError("Invalid email address")
        validate_password(password, self.min_password_length)

        record = {
            "id": user_id or f"user-{uuid.uuid4().hex[:12]}",
            "name": name,
            "email": email,
            "passwordHash": hash_password(password),
            "role": role.value,
            "createdAt": utcnow_iso(),
        }

        def _insert(items: List[Record]) -> List[Record]:
            # unicité vérifiée sous le verrou du store
            if any(normalize_email(u.get("email", "")) == email for u in items):
                raise ValidationError("Email already registered")
            items.append(record)
            return items

        self.store.update(_insert)
        logger.info("user registered id=%s role=%s", record["id"], record["role"])
        return to_identity(record)

    def ensure_admin(self, name: str, email: str, password: str) -> bool:
        """
        Crée le compte admin par défaut s'il n'existe pas. Renvoie True si créé.
        """
        if self.find_by_email(email):
            return False
        self.register(name, email, password, role=Role.admin, user_id="admin-001")
        logger.warning("default admin account created (%s), change its password", normalize_email(email))
        return True
