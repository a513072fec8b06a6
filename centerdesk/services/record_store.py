# centerdesk/services/record_store.py
import asyncio
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, List, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from centerdesk.core.config import settings, collection_path
from centerdesk.core.database import build_session_factory, session_scope, init_db, close_db
from centerdesk.core.errors import (
    BaseAPIError,
    NotFoundError,
    ReadFailure,
    StoreUnavailable,
    ValidationError,
    WriteFailure
)
from centerdesk.core.logging import logger
from centerdesk.models import Document
from centerdesk.schemas.enums import Collection

Record = Dict[str, Any]

# Managed by the store, never taken from callers
RESERVED_FIELDS = {"id", "createdAt", "updatedAt"}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Subscription:
    """
    Live view of one collection: the latest snapshot in ``data``, a
    ``loading`` flag and an ``error`` slot. Iterating yields every new
    snapshot until the subscription is closed.
    """

    def __init__(self, records: "RecordStore"):
        self._records = records
        self._queue: asyncio.Queue = asyncio.Queue()
        self.data: List[Record] = []
        self.loading = True
        self.error: Optional[BaseAPIError] = None
        self.closed = False

    @property
    def collection(self) -> str:
        return self._records.name

    def _push(self, snapshot: List[Record]) -> None:
        self.data = snapshot
        self.loading = False
        self.error = None
        self._queue.put_nowait(snapshot)

    def _fail(self, error: BaseAPIError) -> None:
        self.error = error
        self.loading = False

    async def next_snapshot(self) -> List[Record]:
        return await self._queue.get()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._records._unsubscribe(self)
        # Wake up a pending iterator
        self._queue.put_nowait(None)

    def __aiter__(self):
        return self

    async def __anext__(self) -> List[Record]:
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        snapshot = await self._queue.get()
        if snapshot is None:
            raise StopAsyncIteration
        return snapshot

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class RecordStore:
    """Create/read/update/delete against one named collection"""

    def __init__(self, store: "DocumentStore", name: str):
        self.store = store
        self.name = name
        self.path = collection_path(name, store.installation, store.visibility)
        self._subscribers: List[Subscription] = []

    @staticmethod
    def _clean(data: Record) -> Record:
        payload = jsonable_encoder(data)
        return {key: value for key, value in payload.items() if key not in RESERVED_FIELDS}

    @asynccontextmanager
    async def _writing(self, operation: str, record_id: Optional[str] = None) -> AsyncGenerator[AsyncSession, None]:
        # SQLite allows a single writer
        async with self.store._write_lock:
            try:
                async with self.store.session() as session:
                    yield session
            except SQLAlchemyError as exc:
                logger.error(
                    f"{operation} failed on {self.name}",
                    exc_info=True,
                    extra={"collection": self.name, "record_id": record_id}
                )
                raise WriteFailure(self.name, details={"operation": operation}) from exc

    async def list(self) -> List[Record]:
        try:
            async with self.store.session() as session:
                result = await session.execute(
                    select(Document)
                    .where(Document.path == self.path)
                    .order_by(Document.created_at, Document.id)
                )
                return [document.to_record() for document in result.scalars().all()]
        except SQLAlchemyError as exc:
            logger.error(f"Error fetching {self.name}", exc_info=True, extra={"collection": self.name})
            raise ReadFailure(self.name) from exc

    async def get(self, record_id: str) -> Optional[Record]:
        try:
            async with self.store.session() as session:
                document = await session.get(Document, (self.path, record_id))
                return document.to_record() if document else None
        except SQLAlchemyError as exc:
            logger.error(
                f"Error fetching {self.name}/{record_id}",
                exc_info=True,
                extra={"collection": self.name, "record_id": record_id}
            )
            raise ReadFailure(self.name) from exc

    async def require(self, record_id: str) -> Record:
        record = await self.get(record_id)
        if record is None:
            raise NotFoundError(details={"id": record_id})
        return record

    async def where(self, field: str, value: Any) -> List[Record]:
        return [record for record in await self.list() if record.get(field) == value]

    async def add(self, data: Record) -> str:
        record_id = uuid.uuid4().hex
        now = utcnow()
        async with self._writing("add", record_id) as session:
            session.add(Document(
                path=self.path,
                id=record_id,
                data=self._clean(data),
                created_at=now,
                updated_at=now
            ))
        logger.info(f"Added {self.name}/{record_id}")
        await self._publish()
        return record_id

    async def update(self, record_id: str, data: Record) -> None:
        async with self._writing("update", record_id) as session:
            document = await session.get(Document, (self.path, record_id))
            if document is None:
                raise NotFoundError(details={"id": record_id})
            document.data = {**(document.data or {}), **self._clean(data)}
            document.updated_at = utcnow()
        logger.info(f"Updated {self.name}/{record_id}")
        await self._publish()

    async def array_union(self, record_id: str, field: str, values: List[str]) -> bool:
        """Append missing values to a list field. Returns True if the record changed."""
        return await self._edit_array(
            "array_union",
            record_id,
            field,
            lambda members: members + [value for value in dict.fromkeys(values) if value not in members]
        )

    async def array_remove(self, record_id: str, field: str, values: List[str], missing_ok: bool = False) -> bool:
        """Drop values from a list field. Returns True if the record changed."""
        return await self._edit_array(
            "array_remove",
            record_id,
            field,
            lambda members: [member for member in members if member not in values],
            missing_ok=missing_ok
        )

    async def _edit_array(self, operation: str, record_id: str, field: str, change, missing_ok: bool = False) -> bool:
        # Read and write under one lock hold so concurrent edits are not lost
        async with self._writing(operation, record_id) as session:
            document = await session.get(Document, (self.path, record_id))
            if document is None:
                if missing_ok:
                    return False
                raise NotFoundError(details={"id": record_id})
            members = list((document.data or {}).get(field) or [])
            updated = change(members)
            if updated == members:
                return False
            document.data = {**(document.data or {}), field: updated}
            document.updated_at = utcnow()
        logger.info(f"Updated {self.name}/{record_id} {field}")
        await self._publish()
        return True

    async def delete(self, record_id: str) -> None:
        async with self._writing("delete", record_id) as session:
            await session.execute(
                delete(Document).where(
                    Document.path == self.path,
                    Document.id == record_id
                )
            )
        logger.info(f"Deleted {self.name}/{record_id}")
        await self._publish()

    async def set(self, record_id: str, data: Record, merge: bool = True) -> bool:
        """Create the record if absent, otherwise merge into it. Returns True on create."""
        created = False
        now = utcnow()
        async with self._writing("set", record_id) as session:
            document = await session.get(Document, (self.path, record_id))
            if document is None:
                session.add(Document(
                    path=self.path,
                    id=record_id,
                    data=self._clean(data),
                    created_at=now,
                    updated_at=now
                ))
                created = True
            else:
                existing = (document.data or {}) if merge else {}
                document.data = {**existing, **self._clean(data)}
                document.updated_at = now
        logger.debug(f"{'Created' if created else 'Merged'} {self.name}/{record_id}")
        await self._publish()
        return created

    async def subscribe(self) -> Subscription:
        subscription = Subscription(self)
        self._subscribers.append(subscription)
        try:
            snapshot = await self.list()
        except BaseAPIError as exc:
            logger.error(f"Subscription to {self.name} failed: {exc}")
            subscription._fail(exc)
        else:
            subscription._push(snapshot)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscribers:
            self._subscribers.remove(subscription)

    async def _publish(self) -> None:
        if not self._subscribers:
            return
        try:
            snapshot = await self.list()
        except BaseAPIError as exc:
            for subscription in list(self._subscribers):
                subscription._fail(exc)
            return
        for subscription in list(self._subscribers):
            subscription._push(snapshot)


class DocumentStore:
    """Collections of JSON records kept in a single SQLAlchemy table"""

    def __init__(
        self,
        engine: Optional[AsyncEngine] = None,
        installation: Optional[str] = None,
        visibility: Optional[str] = None
    ):
        self.engine = engine
        self.session_factory = build_session_factory(engine) if engine is not None else None
        self.installation = installation or settings.INSTALLATION_ID
        self.visibility = visibility or settings.DATA_VISIBILITY
        self._collections: Dict[str, RecordStore] = {}
        self._write_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self.session_factory is not None

    async def initialize(self) -> None:
        if self.engine is None:
            raise StoreUnavailable()
        await init_db(self.engine)
        logger.info("Document store initialized")

    async def close(self) -> None:
        if self.engine is not None:
            await close_db(self.engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.session_factory is None:
            raise StoreUnavailable()
        async with session_scope(self.session_factory) as session:
            yield session

    def collection(self, name: Union[str, Collection]) -> RecordStore:
        try:
            name = Collection(name).value
        except ValueError:
            raise ValidationError(details={"collection": "Unknown collection."}) from None
        if name not in self._collections:
            self._collections[name] = RecordStore(self, name)
        return self._collections[name]
