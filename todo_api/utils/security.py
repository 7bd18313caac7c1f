from datetime import datetime, timedelta, UTC
from functools import lru_cache
from jose import jwt
from passlib.context import CryptContext
from todo_api.config import BCRYPT_ROUNDS, JWT_SECRET, JWT_ALGORITHM

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a bcrypt hash.

    If verification raises a ValueError (for example plain >72 bytes, or a
    corrupt stored hash), return False so the caller answers with an
    authentication failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """A throwaway hash to verify against when the account does not exist.

    Running bcrypt on both login failure paths keeps their timing alike.
    """
    return pwd_context.hash("no-such-account-placeholder")


def create_token(user_id: int, email: str) -> str:
    # read expiry at call-time so runtime overrides of
    # todo_api.config.ACCESS_TOKEN_EXPIRE_MINUTES take effect immediately
    import todo_api.config as _cfg
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=_cfg.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "userId": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),  # JWT spec uses Unix timestamp
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Return the token claims; jose raises ExpiredSignatureError / JWTError on failure."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
