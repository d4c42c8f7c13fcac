"""
Schemas for batch sync reporting
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class BucketSyncResult(BaseModel):
    """Outcome of one (action, locale) bucket of a batch"""
    action: str = Field(..., description="upsert or delete")
    locale: str
    alias: str
    collection: Optional[str] = None
    total: int = 0
    succeeded: int = 0
    errors: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors and self.succeeded == self.total


class MessageError(BaseModel):
    """A queued message that could not be validated"""
    index: int
    error: str


class BatchSyncReport(BaseModel):
    """Result of processing one batch of queued product events"""
    received: int = 0
    invalid: List[MessageError] = Field(default_factory=list)
    buckets: List[BucketSyncResult] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return (
            not self.invalid
            and not self.errors
            and all(bucket.success for bucket in self.buckets)
        )

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["success"] = self.success
        return data
