"""
Secondary index provisioning for collections.

Declared indexes are created concurrently once a collection exists. The first
failure aborts the whole operation; index requests already issued are left
to finish on their own.
"""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from motor.motor_asyncio import AsyncIOMotorCollection

from mongoconn.db.exceptions import IndexProvisionError
from mongoconn.models.collection import IndexSpec

logger = structlog.get_logger(__name__)


async def create_index(collection: AsyncIOMotorCollection, spec: IndexSpec) -> str:
    """
    Create a single index on a collection.

    Args:
        collection: Motor collection instance.
        spec: Index key definition and options.

    Returns:
        Name of the created (or already existing) index.
    """
    try:
        return await collection.create_index(spec.index_keys(), **spec.options)
    except Exception as e:
        raise IndexProvisionError(collection.name, spec, e) from e


async def ensure_indexes(
    collection: AsyncIOMotorCollection,
    indexes: Iterable[IndexSpec | Mapping[str, Any]] | None,
) -> list[str]:
    """
    Ensure every declared index exists on a collection.

    All index requests are issued at once and awaited together. The first
    request to fail raises IndexProvisionError; the others are not cancelled.

    Args:
        collection: Motor collection instance.
        indexes: Index specifications, as models or mappings.

    Returns:
        Index names, in the order the specifications were given.
    """
    specs = [IndexSpec.from_value(item) for item in indexes or ()]
    if not specs:
        return []

    names = await asyncio.gather(*(create_index(collection, spec) for spec in specs))

    logger.info("Indexes ensured", collection=collection.name, indexes=names)
    return list(names)
