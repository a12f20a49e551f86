from __future__ import annotations

import time
from dataclasses import dataclass

import bcrypt
from jose import JWTError, jwt

from app.core.settings import Settings


def _check_bcrypt_password_length(password: str) -> None:
    # bcrypt only uses the first 72 bytes of the password.
    # We reject longer passwords to avoid surprising truncation.
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password too long (bcrypt max is 72 bytes)")


def hash_password(password: str) -> str:
    _check_bcrypt_password_length(password)
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _check_bcrypt_password_length(password)
    except ValueError:
        return False

    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


@dataclass(frozen=True)
class TokenData:
    user_id: int
    role: str
    expires_at: int


def create_access_token(settings: Settings, *, user_id: int, role: str) -> str:
    now = int(time.time())
    payload = {
        "sub": str(user_id),
        "role": role,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + int(settings.jwt_access_ttl_seconds),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")


def decode_access_token(settings: Settings, token: str) -> TokenData:
    """Verify signature, issuer, audience and expiry, then return the claims.

    Raises ValueError for any token that does not verify.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as exc:
        raise ValueError("Invalid token") from exc

    sub = payload.get("sub")
    role = payload.get("role")
    if not isinstance(sub, str) or not sub.isdigit():
        raise ValueError("Invalid token")
    if not isinstance(role, str) or not role:
        raise ValueError("Invalid token")

    return TokenData(user_id=int(sub), role=role, expires_at=int(payload["exp"]))
