"""Shared models: authentication accounts and the in-memory record collection."""

import threading
from dataclasses import dataclass
from typing import Dict, Generic, List, Mapping, Optional, TypeVar

from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash


class RegistrationError(ValueError):
    """Missing email/password or an email that is already registered."""


class InvalidCredentials(Exception):
    """Unknown email or wrong password; the two cases are not distinguished."""


@dataclass
class Credential:
    id: str
    email: str
    password_hash: str
    role: str


class AuthAccount(UserMixin):
    """Public identity of an authenticated user, as seen by Flask-Login."""

    def __init__(self, account_id: str, email: str, role: str) -> None:
        self.id = account_id
        self.email = email
        self.role = role

    @classmethod
    def from_credential(cls, credential: Credential) -> "AuthAccount":
        return cls(credential.id, credential.email, credential.role)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<AuthAccount {self.email} ({self.role})>"


def normalize_email(email) -> str:
    return str(email or "").strip().lower()


class IdentityStore:
    """In-memory registry of credentials keyed by normalized email.

    The session only ever stores ``Credential.id``; ``deserialize`` turns it
    back into an ``AuthAccount`` on every request.
    """

    def __init__(self) -> None:
        self._by_email: Dict[str, Credential] = {}
        self._by_id: Dict[str, Credential] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._by_email)

    def register(self, email, password, role: str = "user") -> Credential:
        email = normalize_email(email)
        password = str(password or "")
        role = str(role or "user").strip().lower() or "user"
        if not email or not password:
            raise RegistrationError("email and password are required")

        password_hash = generate_password_hash(password)
        with self._lock:
            if email in self._by_email:
                raise RegistrationError(f"{email} is already registered")
            credential = Credential(
                id=f"auth-{len(self._by_email) + 1}",
                email=email,
                password_hash=password_hash,
                role=role,
            )
            self._by_email[email] = credential
            self._by_id[credential.id] = credential
        return credential

    def authenticate(self, email, password) -> AuthAccount:
        credential = self._by_email.get(normalize_email(email))
        if credential is None or not check_password_hash(credential.password_hash, str(password or "")):
            raise InvalidCredentials("invalid credentials")
        return AuthAccount.from_credential(credential)

    @staticmethod
    def serialize(identity: AuthAccount) -> str:
        return identity.get_id()

    def deserialize(self, account_id) -> Optional[AuthAccount]:
        credential = self._by_id.get(account_id) if account_id else None
        return AuthAccount.from_credential(credential) if credential else None


R = TypeVar("R")


class RecordCollection(Generic[R]):
    """Integer-keyed records with a permanent sentinel under id 0.

    Subclasses provide ``build(record_id, fields)`` and ``sentinel()``.
    The sentinel is hidden from ``list()`` and ignored by ``delete()``.
    """

    SENTINEL_ID = 0

    def __init__(self) -> None:
        self._records: Dict[int, R] = {self.SENTINEL_ID: self.sentinel()}
        self._next_id = 1
        self._lock = threading.Lock()

    def sentinel(self) -> R:
        raise NotImplementedError

    def build(self, record_id: int, fields: Mapping) -> R:
        raise NotImplementedError

    def list(self) -> List[R]:
        return [self._records[key] for key in sorted(self._records) if key != self.SENTINEL_ID]

    def get(self, record_id: int) -> Optional[R]:
        return self._records.get(record_id)

    def create(self, fields: Mapping) -> R:
        with self._lock:
            record_id = self._next_id
            self._next_id += 1
            record = self.build(record_id, fields)
            self._records[record_id] = record
        return record

    def replace(self, record_id: int, fields: Mapping) -> R:
        record = self.build(record_id, fields)
        with self._lock:
            self._records[record_id] = record
            # ids handed out by create() must stay above any id written by PUT
            if record_id >= self._next_id:
                self._next_id = record_id + 1
        return record

    def delete(self, record_id: int) -> bool:
        if record_id == self.SENTINEL_ID:
            return False
        with self._lock:
            return self._records.pop(record_id, None) is not None


def clean_text(value) -> str:
    """Trimmed string value of a form/JSON field; non-strings count as empty."""
    return value.strip() if isinstance(value, str) else ""
