"""Key-value stores backing facility records.

Values are opaque serialized text; the store knows nothing about JSON.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from maps_proxy.config import Settings
from maps_proxy.logging_config import log_structured


class KeyValueStore(ABC):
    async def connect(self):
        pass

    async def close(self):
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored text for ``key`` or None when absent."""

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    async def list_keys(self) -> List[str]:
        """Return every stored key, in no particular order."""


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def list_keys(self) -> List[str]:
        return list(self._data)


class MongoKeyValueStore(KeyValueStore):
    """One document per key: ``{"_id": key, "value": text}``."""

    def __init__(self, uri: str, db_name: str, collection_name: str):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.collection = None

    async def connect(self):
        self.client = AsyncIOMotorClient(self.uri)
        self.collection = self.client[self.db_name][self.collection_name]
        log_structured("MongoDB facility store connected", database=self.db_name, collection=self.collection_name)

    async def close(self):
        if self.client:
            self.client.close()
            self.client = None
            log_structured("MongoDB facility store closed")

    async def get(self, key: str) -> Optional[str]:
        doc = await self.collection.find_one({"_id": key})
        return doc["value"] if doc else None

    async def put(self, key: str, value: str) -> None:
        await self.collection.replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)

    async def list_keys(self) -> List[str]:
        docs = await self.collection.find({}, {"_id": 1}).to_list(length=None)
        return [doc["_id"] for doc in docs]


def build_store(settings: Settings) -> Optional[KeyValueStore]:
    """Select the store backend named by ``FACILITY_STORE``; None disables persistence."""
    if not settings.facility_store:
        return None
    if settings.facility_store == "memory":
        return InMemoryKeyValueStore()
    if settings.facility_store == "mongo":
        return MongoKeyValueStore(settings.mongo_uri, settings.mongo_db_name, settings.facility_collection)
    raise ValueError(f"Unknown facility store backend: {settings.facility_store}")
