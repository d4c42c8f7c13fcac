"""JSON Lines codec used by the Typesense documents/import endpoint."""

import json
from typing import Any, Iterable, List


def dump_jsonl(documents: Iterable[Any]) -> str:
    """
    Serialize documents as one compact JSON object per line.

    Lines are joined with ``\\n`` and there is no trailing newline. Newlines
    inside string values are escaped by the JSON encoder, so every line is
    exactly one document.
    """
    return "\n".join(
        json.dumps(document, ensure_ascii=False, separators=(",", ":"))
        for document in documents
    )


def load_jsonl(text: str) -> List[Any]:
    """
    Parse a JSON Lines body into a list, one item per non-blank line.

    Raises:
        ValueError: if any line is not valid JSON
    """
    items = []
    for number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            items.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON on line {number}: {e.msg}") from e
    return items
