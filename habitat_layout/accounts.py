"""User accounts: signup, login and token-protected profile lookup."""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from .errors import (
    DuplicateEmailError,
    InvalidEmailError,
    InvalidPasswordError,
    InvalidTokenError,
    MissingFieldsError,
    UserNotFoundError,
)
from .models import User

logger = logging.getLogger(__name__)

TOKEN_SALT = "habitat-auth"
DEFAULT_TOKEN_TTL = 2 * 60 * 60


class UserRepository(Protocol):
    def add(self, user: User) -> None:
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    def all(self) -> List[User]:
        ...


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._lock = threading.Lock()

    def add(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = user

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        return None

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def all(self) -> List[User]:
        with self._lock:
            return list(self._users.values())


class AccountService:
    """Registers users and issues time-limited bearer tokens."""

    def __init__(
        self,
        repository: UserRepository,
        secret_key: str,
        token_ttl_seconds: int = DEFAULT_TOKEN_TTL,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.repository = repository
        self.token_ttl_seconds = token_ttl_seconds
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self._clock = clock or time.time
        self._last_id = 0
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        user_id = max(int(self._clock() * 1000), self._last_id + 1)
        self._last_id = user_id
        return user_id

    def issue_token(self, user: User) -> str:
        return self._serializer.dumps({"id": user.id, "email": user.email})

    def signup(self, name: str, email: str, password: str) -> Tuple[User, str]:
        fields = (name, email, password)
        if not all(isinstance(value, str) and value for value in fields):
            raise MissingFieldsError("All fields required")
        # Duplicate check and insert happen under one lock.
        with self._lock:
            if self.repository.find_by_email(email) is not None:
                logger.info("Signup rejected, %s already registered", email)
                raise DuplicateEmailError("Email already registered")
            user = User(
                id=self._next_id(),
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                created_at=datetime.fromtimestamp(self._clock(), tz=timezone.utc).isoformat(),
            )
            self.repository.add(user)
        logger.info("Registered user %s", user.id)
        return user, self.issue_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        user = self.repository.find_by_email(email) if isinstance(email, str) and email else None
        if user is None:
            logger.info("Failed login, unknown email %s", email)
            raise InvalidEmailError("Invalid email")
        if not isinstance(password, str) or not password or not check_password_hash(user.password_hash, password):
            logger.info("Failed login for user %s", user.id)
            raise InvalidPasswordError("Invalid password")
        logger.info("User %s logged in", user.id)
        return user, self.issue_token(user)

    def verify_token(self, token: str) -> Dict[str, object]:
        try:
            return self._serializer.loads(token, max_age=self.token_ttl_seconds)
        except SignatureExpired as exc:
            logger.info("Expired token presented")
            raise InvalidTokenError("Invalid token") from exc
        except BadSignature as exc:
            logger.info("Token with bad signature presented")
            raise InvalidTokenError("Invalid token") from exc

    def profile(self, token: str) -> User:
        payload = self.verify_token(token)
        user = self.repository.find_by_id(int(payload["id"]))
        if user is None:
            raise UserNotFoundError("User not found")
        return user
