"""Typesense services package."""

from app.services.typesense.client import TypesenseClient
from app.services.typesense.jsonl import dump_jsonl, load_jsonl

__all__ = [
    'TypesenseClient',
    'dump_jsonl',
    'load_jsonl',
]
