"""In-memory article records served to API/CLI clients."""

from dataclasses import dataclass
from typing import Mapping

from models import RecordCollection, clean_text


@dataclass
class ArticleRecord:
    id: int
    title: str


def validate_article_fields(fields: Mapping) -> bool:
    return bool(clean_text(fields.get("title")))


class ArticleCollection(RecordCollection[ArticleRecord]):
    """Text-surface articles; independent from the MongoDB documents."""

    def sentinel(self) -> ArticleRecord:
        return ArticleRecord(id=self.SENTINEL_ID, title="System Article")

    def build(self, record_id: int, fields: Mapping) -> ArticleRecord:
        return ArticleRecord(id=record_id, title=clean_text(fields.get("title")))
