"""SQLAlchemy ORM models for the bridge batch store."""

import enum

from sqlalchemy import BigInteger, CheckConstraint, Column, Index, Integer, String, text

from bridge_history.shared.database.connection import Base


class BatchStatus(enum.IntEnum):
    """Proof status of a bridge batch. Only ever advances WITHOUT_PROOF -> WITH_PROOF."""

    WITHOUT_PROOF = 0  # batch is not yet used to compute a proof
    WITH_PROOF = 1  # batch is used to compute a proof


class BridgeBatch(Base):
    """
    Span of L2 blocks bundled together for proof generation.

    Rows are keyed by batch_index, which is strictly increasing and defines
    the order used by "latest" lookups. Ranges [start_block_number,
    end_block_number] are inclusive and expected not to overlap.
    """

    __tablename__ = "bridge_batch"

    id = Column(Integer, primary_key=True, autoincrement=True)
    batch_index = Column(BigInteger, nullable=False, unique=True)
    batch_hash = Column(String(66), nullable=False)
    height = Column(BigInteger, nullable=False)  # block height when the batch was observed
    start_block_number = Column(BigInteger, nullable=False)
    end_block_number = Column(BigInteger, nullable=False)

    # Inserts never bind status; the server default applies
    status = Column(
        Integer,
        nullable=False,
        server_default=text(str(int(BatchStatus.WITHOUT_PROOF))),
    )

    __table_args__ = (
        CheckConstraint(
            "start_block_number <= end_block_number", name="ck_bridge_batch_block_range"
        ),
        Index("idx_bridge_batch_block_range", "start_block_number", "end_block_number"),
        Index("idx_bridge_batch_status", "status"),
    )
