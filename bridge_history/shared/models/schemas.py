"""Pydantic schemas for bridge batch records."""

from pydantic import BaseModel, Field, model_validator

from bridge_history.shared.database.models import BatchStatus


class BridgeBatchInfo(BaseModel):
    """
    One bridge batch record as handed to and returned by the repository.

    Lookups only fetch the columns they need; fields a query does not select
    keep their zero value (0, "" or WITHOUT_PROOF).
    """

    id: int = Field(0, ge=0, description="Storage-assigned identifier")
    batch_index: int = Field(0, ge=0, description="Strictly increasing batch sequence number")
    batch_hash: str = Field("", description="Content-derived batch identifier")
    height: int = Field(0, ge=0, description="Block height associated with the batch at insert time")
    start_block_number: int = Field(0, ge=0, description="First block covered (inclusive)")
    end_block_number: int = Field(0, ge=0, description="Last block covered (inclusive)")
    status: BatchStatus = Field(BatchStatus.WITHOUT_PROOF, description="Proof status")

    @model_validator(mode="after")
    def validate_block_range(self) -> "BridgeBatchInfo":
        """Validate start_block_number <= end_block_number."""
        if self.start_block_number > self.end_block_number:
            raise ValueError(
                f"start_block_number {self.start_block_number} is after "
                f"end_block_number {self.end_block_number}"
            )
        return self
