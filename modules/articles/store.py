"""MongoDB-backed article documents used by the HTML article pages."""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class DocumentStoreUnavailable(Exception):
    """No URI configured, or the store could not be reached / queried."""


@dataclass
class ArticleDocument:
    id: str
    title: str
    body: str
    created_at: Optional[datetime]

    @classmethod
    def from_mongo(cls, doc: dict) -> "ArticleDocument":
        return cls(
            id=str(doc.get("_id")),
            title=doc.get("title") or "",
            body=doc.get("body") or "",
            created_at=doc.get("createdAt"),
        )


class ArticleDocumentRepository:
    """Lazy, process-wide connection to the ``mongoarticles`` collection.

    The client is created on first use and memoized; concurrent first calls
    are serialized by a lock so only one client is ever kept.
    """

    def __init__(
        self,
        uri: str,
        collection_name: str = "mongoarticles",
        default_db: str = "course",
        timeout_ms: int = 3000,
        client_factory: Callable[..., MongoClient] = MongoClient,
    ) -> None:
        self.uri = uri or ""
        self.collection_name = collection_name
        self.default_db = default_db
        self.timeout_ms = timeout_ms
        self._client_factory = client_factory
        self._client = None
        self._collection = None
        self._lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return bool(self.uri)

    def collection(self):
        if not self.configured:
            raise DocumentStoreUnavailable("MONGODB_URI is not set")
        if self._collection is not None:
            return self._collection

        with self._lock:
            if self._collection is None:
                try:
                    client = self._client_factory(self.uri, serverSelectionTimeoutMS=self.timeout_ms)
                    db = client.get_default_database(default=self.default_db)
                except PyMongoError as exc:
                    logger.warning("[mongo] cannot open client: %s", exc)
                    raise DocumentStoreUnavailable(str(exc)) from exc
                self._client = client
                self._collection = db[self.collection_name]
                logger.info("[mongo] using %s.%s", db.name, self.collection_name)
        return self._collection

    def list_recent(self) -> List[ArticleDocument]:
        collection = self.collection()
        try:
            docs = list(collection.find({}).sort("createdAt", DESCENDING))
        except PyMongoError as exc:
            logger.warning("[mongo] list failed: %s", exc)
            raise DocumentStoreUnavailable(str(exc)) from exc
        return [ArticleDocument.from_mongo(doc) for doc in docs]

    def insert(self, title: str, body: str) -> ArticleDocument:
        collection = self.collection()
        doc = {"title": title, "body": body, "createdAt": datetime.now(timezone.utc)}
        try:
            result = collection.insert_one(doc)
        except PyMongoError as exc:
            logger.warning("[mongo] insert failed: %s", exc)
            raise DocumentStoreUnavailable(str(exc)) from exc
        doc["_id"] = result.inserted_id
        return ArticleDocument.from_mongo(doc)

    def find_by_id(self, raw_id) -> Optional[ArticleDocument]:
        if raw_id is None:
            return None
        try:
            object_id = ObjectId(raw_id)
        except (InvalidId, TypeError):
            return None

        collection = self.collection()
        try:
            doc = collection.find_one({"_id": object_id})
        except PyMongoError as exc:
            logger.warning("[mongo] lookup of %s failed: %s", raw_id, exc)
            raise DocumentStoreUnavailable(str(exc)) from exc
        return ArticleDocument.from_mongo(doc) if doc else None

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
            self._client = None
            self._collection = None
