"""In-memory user records."""

from dataclasses import dataclass
from typing import Mapping

from models import RecordCollection, clean_text


@dataclass
class UserRecord:
    id: int
    surname: str = ""
    first_name: str = ""
    email: str = ""
    info: str = ""
    name: str = ""


def validate_user_fields(fields: Mapping) -> bool:
    """Either both ``surname`` and ``firstName`` or a ``name`` must be non-empty."""
    has_person = bool(clean_text(fields.get("surname")) and clean_text(fields.get("firstName")))
    return has_person or bool(clean_text(fields.get("name")))


class UserCollection(RecordCollection[UserRecord]):
    def sentinel(self) -> UserRecord:
        return UserRecord(id=self.SENTINEL_ID, name="System User")

    def build(self, record_id: int, fields: Mapping) -> UserRecord:
        surname = clean_text(fields.get("surname"))
        first_name = clean_text(fields.get("firstName"))
        display_name = f"{surname} {first_name}".strip() or clean_text(fields.get("name"))
        return UserRecord(
            id=record_id,
            surname=surname,
            first_name=first_name,
            email=clean_text(fields.get("email")),
            info=clean_text(fields.get("info")),
            name=display_name,
        )
