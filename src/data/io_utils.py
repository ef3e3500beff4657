"""
Shared I/O utilities for reading the provider dataset.

The dataset is a JSON document exported from the provider directory. Two
shapes are accepted:

- ``{"total": <int>, "data": [<provider>, ...]}`` (the export format)
- ``[<provider>, ...]`` (a bare list; the total is then the list length)

Key Functions:
- read_json_document: Read JSON from a path, bytes or an in-memory buffer
- extract_records: Split a decoded document into (records, total)
"""

from __future__ import annotations

import json
import logging
from io import BytesIO
from pathlib import Path
from typing import Any, List, Tuple, Union

logger = logging.getLogger(__name__)


def read_json_document(raw_input: Union[Path, str, bytes, BytesIO]) -> Any:
    """Decode a JSON document from a file path, raw bytes or a buffer.

    Args:
        raw_input: Path (or path string), bytes/bytearray, or BytesIO buffer

    Returns:
        The decoded JSON value

    Raises:
        FileNotFoundError: If a path is given and does not exist
        ValueError: If the content is not valid JSON
    """
    if isinstance(raw_input, (bytes, bytearray, memoryview)):
        text = bytes(raw_input).decode("utf-8-sig")
        source = "<bytes>"
    elif isinstance(raw_input, BytesIO):
        raw_input.seek(0)
        text = raw_input.read().decode("utf-8-sig")
        source = "<buffer>"
    else:
        path = Path(raw_input)
        if not path.exists():
            raise FileNotFoundError(f"File {path} does not exist")
        text = path.read_text(encoding="utf-8-sig")
        source = str(path)

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {source}: {e}") from e

    logger.debug(f"Decoded JSON document from {source}")
    return document


def extract_records(document: Any) -> Tuple[List[Any], int]:
    """Return the provider records and the declared total from a document.

    A missing or non-numeric ``total`` falls back to the number of records.
    """
    if isinstance(document, list):
        return list(document), len(document)

    if isinstance(document, dict):
        records = document.get("data") or []
        if not isinstance(records, list):
            logger.warning(f"Dataset 'data' field is {type(records).__name__}, expected list")
            records = []
        total = document.get("total")
        if isinstance(total, bool) or not isinstance(total, int):
            total = len(records)
        return list(records), total

    raise ValueError(f"Unsupported dataset document type: {type(document).__name__}")
