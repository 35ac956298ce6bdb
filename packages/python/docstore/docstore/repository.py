"""Async, schema-validated access to one MongoDB collection.

Every write is validated before the store is contacted. Store failures are
translated at the operation boundary into ``StoreUnavailable`` or
``StoreOperationFailed``; a missing document is ``None``, never an error.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, AsyncIterator, Iterator, Mapping, Optional, Sequence

from loguru import logger
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, PyMongoError

from db_core import MongoFilter, MongoSettings, create_client, get_db, ping

from .errors import RepositoryError, StoreOperationFailed, StoreUnavailable, ValidationFailed
from .filters import build_query, coerce_id
from .models import StoredDocument
from .schema import Schema

SortSpec = Sequence[tuple[str, int]]


@contextmanager
def translate_store_errors(operation: str, collection: str) -> Iterator[None]:
    """Re-raise pymongo failures as repository errors."""

    try:
        yield
    except ConnectionFailure as exc:
        logger.warning(
            "{operation} on {collection} failed, store unavailable: {error}",
            operation=operation,
            collection=collection,
            error=exc,
        )
        raise StoreUnavailable(exc) from exc
    except PyMongoError as exc:
        logger.warning(
            "{operation} on {collection} rejected by store: {error}",
            operation=operation,
            collection=collection,
            error=exc,
        )
        raise StoreOperationFailed(exc) from exc


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class DocumentCursor:
    """Lazy, restartable view over the documents matching a query.

    Nothing is sent to the store until iteration starts; each ``async for``
    runs the query again.
    """

    def __init__(
        self,
        collection,
        query: MongoFilter,
        *,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> None:
        self._collection = collection
        self._query = query
        self._sort = list(sort) if sort else None
        self._limit = limit

    @property
    def query(self) -> MongoFilter:
        return dict(self._query)

    def __aiter__(self) -> AsyncIterator[StoredDocument]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[StoredDocument]:
        name = self._collection.name
        start = time.perf_counter()
        count = 0
        with translate_store_errors("find", name):
            cursor = self._collection.find(self._query)
            if self._sort:
                cursor = cursor.sort(self._sort)
            if self._limit:
                cursor = cursor.limit(self._limit)
            async for doc in cursor:
                count += 1
                yield StoredDocument.from_mongo(doc)
        logger.debug(
            "find {collection} {query} -> {count} document(s) in {duration:.2f} ms",
            collection=name,
            query=self._query,
            count=count,
            duration=_elapsed_ms(start),
        )

    async def to_list(self) -> list[StoredDocument]:
        return [doc async for doc in self]


class DocumentRepository:
    """Validated CRUD operations over one collection.

    The collection handle is passed in and may be shared by any number of
    concurrent operations; the repository keeps no other state.
    """

    def __init__(self, collection, schema: Schema, *, strict_schema: bool = True) -> None:
        self.collection = collection
        self.schema = schema
        self.strict_schema = strict_schema

    @classmethod
    async def open(
        cls,
        settings: MongoSettings,
        schema: Schema,
        collection_name: str,
    ) -> "DocumentRepository":
        """Connect with ``settings`` and check the server answers a ping."""

        client = create_client(settings)
        db = get_db(client, settings)
        try:
            with translate_store_errors("connect", collection_name):
                await ping(db)
        except RepositoryError:
            client.close()
            raise
        logger.info(
            "Connected to {db}.{collection} (strict_schema={strict})",
            db=settings.db_name,
            collection=collection_name,
            strict=settings.strict_schema,
        )
        return cls(db[collection_name], schema, strict_schema=settings.strict_schema)

    @property
    def name(self) -> str:
        return self.collection.name

    # ---------------------------------------------------------
    # CREATE
    # ---------------------------------------------------------
    async def create(self, document: Mapping[str, Any]) -> StoredDocument:
        result = self.schema.validate(document, strict=self.strict_schema)
        if not result.ok:
            raise ValidationFailed(result.errors)

        record = dict(result.document)
        start = time.perf_counter()
        with translate_store_errors("insert_one", self.name):
            inserted = await self.collection.insert_one(record)
        record["_id"] = inserted.inserted_id
        logger.debug(
            "insert_one {collection} -> {id} in {duration:.2f} ms",
            collection=self.name,
            id=inserted.inserted_id,
            duration=_elapsed_ms(start),
        )
        return StoredDocument.from_mongo(record)

    # ---------------------------------------------------------
    # READ
    # ---------------------------------------------------------
    def find(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        *,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> DocumentCursor:
        return DocumentCursor(self.collection, build_query(filter), sort=sort, limit=limit)

    async def find_one(self, filter: Optional[Mapping[str, Any]] = None) -> Optional[StoredDocument]:
        query = build_query(filter)
        with translate_store_errors("find_one", self.name):
            doc = await self.collection.find_one(query)
        return StoredDocument.from_mongo(doc) if doc else None

    async def get(self, identifier: Any) -> Optional[StoredDocument]:
        return await self.find_one({"_id": identifier})

    async def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        query = build_query(filter)
        with translate_store_errors("count_documents", self.name):
            return await self.collection.count_documents(query)

    # ---------------------------------------------------------
    # UPDATE
    # ---------------------------------------------------------
    async def update_one(self, identifier: Any, patch: Mapping[str, Any]) -> Optional[StoredDocument]:
        """Set the patched fields atomically and return the updated document."""

        result = self.schema.validate_partial(patch, strict=self.strict_schema)
        if not result.ok:
            raise ValidationFailed(result.errors)
        if not result.document:
            return await self.get(identifier)

        start = time.perf_counter()
        with translate_store_errors("find_one_and_update", self.name):
            doc = await self.collection.find_one_and_update(
                {"_id": coerce_id(identifier)},
                {"$set": result.document},
                return_document=ReturnDocument.AFTER,
            )
        logger.debug(
            "find_one_and_update {collection} {id} -> {found} in {duration:.2f} ms",
            collection=self.name,
            id=identifier,
            found=doc is not None,
            duration=_elapsed_ms(start),
        )
        return StoredDocument.from_mongo(doc) if doc else None

    # ---------------------------------------------------------
    # DELETE
    # ---------------------------------------------------------
    async def delete_one(self, identifier: Any) -> Optional[StoredDocument]:
        """Remove and return the document, or ``None`` if nothing matched."""

        start = time.perf_counter()
        with translate_store_errors("find_one_and_delete", self.name):
            doc = await self.collection.find_one_and_delete({"_id": coerce_id(identifier)})
        logger.debug(
            "find_one_and_delete {collection} {id} -> {found} in {duration:.2f} ms",
            collection=self.name,
            id=identifier,
            found=doc is not None,
            duration=_elapsed_ms(start),
        )
        return StoredDocument.from_mongo(doc) if doc else None
