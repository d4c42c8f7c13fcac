"""Shapes of the Typesense responses the sync relies on."""
from typing import Optional

from pydantic import BaseModel


class AliasResponse(BaseModel):
    collection_name: str
    name: str


class ErrorResponse(BaseModel):
    message: str


class ImportResult(BaseModel):
    """One line of a documents/import response."""
    success: bool
    error: Optional[str] = None
    document: Optional[str] = None


class DeleteResponse(BaseModel):
    num_deleted: int
