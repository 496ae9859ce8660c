"""Bridge batch storage module."""

from bridge_history.storage.bridge_batch_repository import (
    BridgeBatchRepository,
    bridge_batch_repository,
)

__all__ = ["BridgeBatchRepository", "bridge_batch_repository"]
