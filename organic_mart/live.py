"""
Live document and collection subscriptions.

``watch_collection`` and ``watch_document`` are async generators of
``Snapshot`` values. Every subscription starts with a loading snapshot, then
yields the current data, then yields again each time the data changes. A store
error while reading or watching yields a final snapshot carrying the error and
the last known data.

Changes are detected with MongoDB change streams, started before the first
read. Standalone servers reject change streams, in which case the subscription
falls back to re-reading every ``snapshot_poll_interval_seconds`` and only
yields when the result differs.
"""
import asyncio
import json
import logging
from dataclasses import dataclass, asdict
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Tuple

from fastapi.encoders import jsonable_encoder
from motor.motor_asyncio import AsyncIOMotorChangeStream, AsyncIOMotorCollection
from pymongo.errors import OperationFailure, PyMongoError

from .config.settings import get_settings
from .utils.serializers import serialize_doc, serialize_docs

logger = logging.getLogger(__name__)

SortSpec = List[Tuple[str, int]]


@dataclass
class Snapshot:
    data: Any = None
    loading: bool = True
    error: Optional[str] = None

    @classmethod
    def pending(cls) -> "Snapshot":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


async def _open_change_stream(
    collection: AsyncIOMotorCollection,
    pipeline: List[Dict[str, Any]],
    poll_interval: float,
) -> Optional[AsyncIOMotorChangeStream]:
    """Start a change stream, or return None when the server does not support them.

    Writes made after this returns produce change events, so the first read of
    a subscription happens after it.
    """
    stream = None
    try:
        stream = collection.watch(pipeline)
        await stream.try_next()
    except (OperationFailure, NotImplementedError) as e:
        if stream is not None:
            await stream.close()
        logger.warning(
            "Change streams unavailable on %s (%s), polling every %ss",
            collection.name, e, poll_interval,
        )
        return None
    except PyMongoError:
        if stream is not None:
            await stream.close()
        raise
    return stream


async def _change_triggers(
    stream: Optional[AsyncIOMotorChangeStream],
    poll_interval: float,
) -> AsyncIterator[None]:
    if stream is not None:
        async for _change in stream:
            yield None
        return

    while True:
        await asyncio.sleep(poll_interval)
        yield None


async def _subscribe(
    collection: AsyncIOMotorCollection,
    read: Callable[[], Awaitable[Any]],
    pipeline: List[Dict[str, Any]],
    use_change_streams: Optional[bool],
    poll_interval: Optional[float],
) -> AsyncIterator[Snapshot]:
    settings = get_settings()
    if use_change_streams is None:
        use_change_streams = settings.snapshot_use_change_streams
    if poll_interval is None:
        poll_interval = settings.snapshot_poll_interval_seconds

    yield Snapshot.pending()

    stream = None
    data = None
    try:
        if use_change_streams:
            stream = await _open_change_stream(collection, pipeline, poll_interval)

        data = await read()
        yield Snapshot(data=data, loading=False)

        async for _ in _change_triggers(stream, poll_interval):
            fresh = await read()
            if fresh != data:
                data = fresh
                yield Snapshot(data=data, loading=False)
    except PyMongoError as e:
        logger.error("Error in subscription to %s: %s", collection.name, e)
        yield Snapshot(data=data, loading=False, error=str(e))
    finally:
        if stream is not None:
            await stream.close()


async def watch_collection(
    collection: Optional[AsyncIOMotorCollection],
    filter: Optional[Dict[str, Any]] = None,
    *,
    sort: Optional[SortSpec] = None,
    limit: int = 0,
    use_change_streams: Optional[bool] = None,
    poll_interval: Optional[float] = None,
) -> AsyncIterator[Snapshot]:
    """Subscribe to the documents matching ``filter``; data is a list of dicts."""
    if collection is None:
        yield Snapshot(data=None, loading=False)
        return

    async def read() -> List[Dict[str, Any]]:
        cursor = collection.find(filter or {})
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return serialize_docs(await cursor.to_list(length=None))

    async for snapshot in _subscribe(collection, read, [], use_change_streams, poll_interval):
        yield snapshot


async def watch_document(
    collection: Optional[AsyncIOMotorCollection],
    doc_id: Any,
    *,
    use_change_streams: Optional[bool] = None,
    poll_interval: Optional[float] = None,
) -> AsyncIterator[Snapshot]:
    """Subscribe to one document; data is None while it does not exist."""
    if collection is None or doc_id is None:
        yield Snapshot(data=None, loading=False)
        return

    async def read() -> Optional[Dict[str, Any]]:
        return serialize_doc(await collection.find_one({"_id": doc_id}))

    pipeline = [{"$match": {"documentKey._id": doc_id}}]
    async for snapshot in _subscribe(collection, read, pipeline, use_change_streams, poll_interval):
        yield snapshot


async def watch_one(
    collection: Optional[AsyncIOMotorCollection],
    filter: Dict[str, Any],
    *,
    use_change_streams: Optional[bool] = None,
    poll_interval: Optional[float] = None,
) -> AsyncIterator[Snapshot]:
    """Subscribe to the first document matching ``filter``."""
    if collection is None:
        yield Snapshot(data=None, loading=False)
        return

    async def read() -> Optional[Dict[str, Any]]:
        return serialize_doc(await collection.find_one(filter))

    async for snapshot in _subscribe(collection, read, [], use_change_streams, poll_interval):
        yield snapshot


async def sse_events(snapshots: AsyncIterator[Snapshot]) -> AsyncIterator[str]:
    """Encode snapshots as Server-Sent Events frames."""
    async for snapshot in snapshots:
        payload = json.dumps(jsonable_encoder(snapshot.to_dict()))
        yield f"event: snapshot\ndata: {payload}\n\n"
