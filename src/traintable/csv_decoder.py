"""Decoder for the comma-separated tables inside a GTFS feed.

This is deliberately not a general CSV parser: fields are split on every
comma and no quoting or escaping is honoured, so feed fields must never
contain commas.
"""

import csv
import io
from typing import Dict, List, Optional

Row = Dict[str, Optional[str]]


def decode_table(text: str) -> List[Row]:
    """
    Decode a table whose first line is the header.

    Args:
        text: Raw table text.

    Returns:
        One dict per non-blank data line, keyed by header field, with trimmed
        string values. Fields missing from a short line are None; values past
        the last header field are dropped. Empty text yields an empty list.
    """
    reader = csv.DictReader(
        io.StringIO(text.lstrip("\ufeff")),
        quoting=csv.QUOTE_NONE,
        restval=None,
    )
    if not reader.fieldnames or not any(name.strip() for name in reader.fieldnames):
        return []

    fieldnames = reader.fieldnames
    headers = [name.strip() for name in fieldnames]
    rows: List[Row] = []
    for record in reader:
        values = [record.get(name) for name in fieldnames]
        # a whitespace-only line decodes as a single blank field
        if all(value is None or not value.strip() for value in values):
            continue
        rows.append({
            header: value.strip() if value is not None else None
            for header, value in zip(headers, values)
        })
    return rows
