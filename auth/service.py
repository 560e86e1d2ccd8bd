"""
auth/service.py -- Registration and login.

AuthService is the only entry point the HTTP layer uses for identity. It
composes the three identity building blocks:

  auth.passwords  -- hash on register, verify on login
  auth.tokens     -- TokenIssuer, invoked only on a successful login
  auth.store      -- UserStore, the single view of persistence

State transitions:
  register: absent -> created           (AlreadyExists if present)
  login:    present + right password -> token
            absent                   -> NotFound
            wrong password           -> InvalidCredential

Distinct messages for "no such user" and "wrong password" are part of the
public contract of this API, so login does not try to hide which one failed.

Layer rule: no imports from api/.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from auth.models import User
from auth.passwords import hash_password, verify_password
from auth.store import UserStore
from auth.tokens import TokenIssuer
from core.errors import AlreadyExists, InvalidCredential, NotFound

logger = logging.getLogger("rentcar.auth")

DEFAULT_ROLE = "User"


@dataclass(frozen=True)
class LoginResult:
    """Safe login payload: identity and token, never password material."""

    token: str
    first_name: str
    last_name: str
    role: str
    phone_number: str
    email: str


class AuthService:
    def __init__(self, store: UserStore, issuer: TokenIssuer) -> None:
        self.store = store
        self.issuer = issuer

    def register(
        self,
        phone_number: str,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> User:
        """Create a user with a freshly salted password hash.

        The existence check gives the common case a clean error without a
        failed insert. Two concurrent registrations can both pass it; the
        store's primary key then rejects the second insert with the same
        AlreadyExists, so the store always ends with exactly one record.
        """
        if self.store.get_by_phone(phone_number) is not None:
            logger.info("Registration rejected: %s already exists", phone_number)
            raise AlreadyExists("User already exists")

        password_hash, password_salt = hash_password(password)
        user = User(
            phone_number=phone_number,
            first_name=first_name,
            last_name=last_name,
            email=email,
            role=DEFAULT_ROLE,
            password_hash=password_hash,
            password_salt=password_salt,
        )
        created = self.store.create_user(user)
        logger.info("Registered user %s", phone_number)
        return created

    def login(self, phone_number: str, password: str) -> LoginResult:
        """Verify credentials and issue a bearer token."""
        user = self.store.find_first(phone_number=phone_number)
        if user is None:
            logger.info("Login failed: unknown user %s", phone_number)
            raise NotFound("User Not Found!")

        if not verify_password(password, user.password_hash, user.password_salt):
            logger.warning("Login failed: wrong password for %s", phone_number)
            raise InvalidCredential("Wrong Password")

        token = self.issuer.issue(user)
        logger.info("Login: %s", phone_number)
        return LoginResult(
            token=token,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            phone_number=user.phone_number,
            email=user.email,
        )

    def get_user(self, phone_number: str) -> User:
        user = self.store.get_by_phone(phone_number)
        if user is None:
            raise NotFound("User not found")
        return user
