import secrets

import bcrypt

from app.core.errors import ValidationError

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72


def _password_bytes_ok(pw: str) -> bool:
    # bcrypt hard-limit: 72 bytes
    return len(pw.encode("utf-8")) <= BCRYPT_MAX_BYTES


def validate_password(password: str, min_length: int = 6) -> None:
    if not password or len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters")
    if not _password_bytes_ok(password):
        raise ValidationError("Password too long (bcrypt accepts at most 72 bytes)")


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


# hash de remplacement pour un email inconnu : même coût bcrypt qu'un mauvais mot de passe
DUMMY_PASSWORD_HASH = hash_password(secrets.token_urlsafe(16))


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash or not _password_bytes_ok(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # hash corrompu dans users.json
        return False
