# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""Bridge batch storage."""

import logging
from typing import Optional, Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bridge_history.shared.database.connection import get_async_session_factory
from bridge_history.shared.database.models import BatchStatus, BridgeBatch
from bridge_history.shared.models.schemas import BridgeBatchInfo

logger = logging.getLogger(__name__)

# Column sets selected by each lookup
LATEST_BATCH_COLUMNS = (
    BridgeBatch.id,
    BridgeBatch.height,
    BridgeBatch.batch_hash,
    BridgeBatch.start_block_number,
    BridgeBatch.end_block_number,
)
BATCH_WITH_STATUS_COLUMNS = (
    BridgeBatch.id,
    BridgeBatch.batch_index,
    BridgeBatch.height,
    BridgeBatch.start_block_number,
    BridgeBatch.end_block_number,
    BridgeBatch.status,
)
BATCH_BY_INDEX_COLUMNS = (
    BridgeBatch.id,
    BridgeBatch.batch_index,
    BridgeBatch.height,
    BridgeBatch.start_block_number,
    BridgeBatch.end_block_number,
)


def _to_batch_info(row: Row) -> BridgeBatchInfo:
    return BridgeBatchInfo.model_validate(dict(row._mapping))


class BridgeBatchRepository:
    """
    Reads and writes rows of the bridge_batch table.

    Writes run on the caller's session and are never committed here. Reads
    open a short-lived session from the session factory.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self._session_factory = session_factory

    @property
    def session_factory(self) -> async_sessionmaker:
        # Resolved per call so a disposed engine is never reused
        if self._session_factory is None:
            return get_async_session_factory()
        return self._session_factory

    async def insert_batches(
        self,
        db_tx: AsyncSession,
        batches: Sequence[BridgeBatchInfo],
    ) -> None:
        """
        Insert bridge batches one by one, in order, inside the caller's transaction.

        Stops at the first failing insert and re-raises its error. Rows inserted
        before the failure stay pending in db_tx; committing or rolling back is
        up to the caller.

        Args:
            db_tx: Caller-owned session
            batches: Records to insert; status is left to the column default
        """
        if not batches:
            return

        for batch in batches:
            stmt = insert(BridgeBatch).values(
                height=batch.height,
                batch_index=batch.batch_index,
                batch_hash=batch.batch_hash,
                start_block_number=batch.start_block_number,
                end_block_number=batch.end_block_number,
            )
            try:
                await db_tx.execute(stmt)
            except SQLAlchemyError:
                logger.error(
                    f"insert_batches: failed to insert bridge batch at height {batch.height} "
                    f"(batch_index={batch.batch_index})"
                )
                raise

        logger.debug(f"Inserted {len(batches)} bridge batches")

    async def get_latest_batch(self) -> Optional[BridgeBatchInfo]:
        """Get the batch with the highest batch_index, or None if there are none."""
        stmt = (
            select(*LATEST_BATCH_COLUMNS)
            .order_by(BridgeBatch.batch_index.desc())
            .limit(1)
        )
        return await self._fetch_first(stmt)

    async def get_batch_by_block(self, height: int) -> Optional[BridgeBatchInfo]:
        """Get the batch whose block range contains height (inclusive)."""
        stmt = select(*BATCH_WITH_STATUS_COLUMNS).where(
            BridgeBatch.start_block_number <= height,
            BridgeBatch.end_block_number >= height,
        )
        return await self._fetch_first(stmt)

    async def get_latest_batch_with_proof(self) -> Optional[BridgeBatchInfo]:
        """Get the highest-index batch already marked WITH_PROOF."""
        stmt = (
            select(*BATCH_WITH_STATUS_COLUMNS)
            .where(BridgeBatch.status == int(BatchStatus.WITH_PROOF))
            .order_by(BridgeBatch.batch_index.desc())
            .limit(1)
        )
        return await self._fetch_first(stmt)

    async def get_batch_by_index(self, index: int) -> BridgeBatchInfo:
        """
        Get batch by batch_index.

        Unlike the other lookups a missing batch is an error here.

        Raises:
            sqlalchemy.exc.NoResultFound: No batch has this index
        """
        stmt = select(*BATCH_BY_INDEX_COLUMNS).where(BridgeBatch.batch_index == index)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return _to_batch_info(result.one())

    async def update_batch_status(
        self,
        db_tx: AsyncSession,
        batch_index: int,
        status: BatchStatus,
    ) -> None:
        """
        Set the status of a batch inside the caller's transaction.

        No transition check is made, and a batch_index that matches nothing
        is not an error. A status outside BatchStatus raises ValueError before
        any SQL is issued.
        """
        status = BatchStatus(status)
        stmt = (
            update(BridgeBatch)
            .where(BridgeBatch.batch_index == batch_index)
            .values(status=int(status))
        )
        await db_tx.execute(stmt)
        logger.debug(f"Set bridge batch {batch_index} status to {status.name}")

    async def _fetch_first(self, stmt) -> Optional[BridgeBatchInfo]:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            row = result.first()
        if row is None:
            return None
        return _to_batch_info(row)


# Global repository instance bound to the configured database
bridge_batch_repository = BridgeBatchRepository()
