import logging
from dataclasses import dataclass

from jose import ExpiredSignatureError, JWTError

from todo_api.errors import AuthenticationError, ConflictError, ValidationError
from todo_api.stores.base import UserRecord, UserStore
from todo_api.utils.security import create_token, decode_token, dummy_hash, hash_password, verify_password
from todo_api.validation import require_credentials, validate_email, validate_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as decoded from a bearer token."""

    user_id: int
    email: str


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    user: UserRecord


class AuthService:
    def __init__(self, users: UserStore):
        self.users = users

    def register(self, email, password) -> UserRecord:
        require_credentials(email, password)
        if not validate_email(email):
            raise ValidationError("Invalid email format")
        validate_password(password)

        if self.users.get_by_email(email):
            raise ConflictError("User with this email already exists")

        user = self.users.add(email, hash_password(password))
        logger.info("registered user id=%s", user.id)
        return user

    def login(self, email, password) -> LoginResult:
        require_credentials(email, password)
        user = self.users.get_by_email(email)
        # same message, and the same bcrypt work, whether the account is missing or the password is wrong
        stored_hash = user.password_hash if user is not None else dummy_hash()
        if not verify_password(password, stored_hash) or user is None:
            logger.info("failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = create_token(user.id, user.email)
        logger.info("user id=%s logged in", user.id)
        return LoginResult(access_token=token, user=user)

    def verify_token(self, token) -> Identity:
        if not token:
            raise AuthenticationError("No token provided")
        try:
            claims = decode_token(token)
        except ExpiredSignatureError:
            logger.debug("rejected expired token")
            raise AuthenticationError("Token has expired")
        except JWTError:
            logger.debug("rejected invalid token")
            raise AuthenticationError("Invalid token")

        user_id = claims.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthenticationError("Invalid token")

        user = self.users.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return Identity(user_id=user.id, email=user.email)
