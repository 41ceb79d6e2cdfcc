from __future__ import annotations

"""
Lenient CSV reader for the knowledge-base sources.

The sources are small hand-edited spreadsheets exported as CSV, so the
reader favours keeping data over rejecting it: column count mismatches
are absorbed (missing fields become ``""``, extra fields are dropped)
and unbalanced quotes simply leave the scanner in whatever quote state
results.  The only hard failure is content that is not text at all.

Supported syntax:

* ``,`` separates fields outside quotes
* ``"`` toggles quoting; ``""`` inside quotes is a literal quote
* ``\\n``, ``\\r\\n`` and a lone ``\\r`` end a row outside quotes

Example::

    from csvrag.tabular import parse
    parse('id,name\\n1,"Acme, Inc."\\n')
    # [{'id': '1', 'name': 'Acme, Inc.'}]
"""

from typing import Dict, List, NamedTuple, Union

from .errors import ParseError

Record = Dict[str, str]

_BOM = "\ufeff"


class Table(NamedTuple):
    header: List[str]
    records: List[Record]


def _as_text(raw: Union[str, bytes]) -> str:
    if isinstance(raw, (bytes, bytearray)):
        try:
            return bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Source is not valid UTF-8 text: {e}") from e
    if not isinstance(raw, str):
        raise ParseError(f"Expected text, got {type(raw).__name__}")
    if raw.startswith(_BOM):
        return raw[1:]
    return raw


def parse_rows(raw: Union[str, bytes]) -> List[List[str]]:
    """Split raw CSV text into rows of untrimmed fields."""
    text = _as_text(raw)
    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        c = text[i]

        if c == '"':
            if in_quotes and i + 1 < n and text[i + 1] == '"':
                field.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
            i += 1
            continue

        if not in_quotes and c == ",":
            row.append("".join(field))
            field = []
            i += 1
            continue

        if not in_quotes and c in "\r\n":
            if c == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            row.append("".join(field))
            field = []
            rows.append(row)
            row = []
            i += 1
            continue

        field.append(c)
        i += 1

    # last row without a trailing line ending
    if field or row:
        row.append("".join(field))
        rows.append(row)

    return rows


def parse_table(raw: Union[str, bytes]) -> Table:
    """
    Parse CSV text into a header and its records.

    The first row is the header.  Each later row is mapped positionally
    onto the header; rows whose fields are all blank are dropped.  Every
    value is trimmed.  Empty input yields an empty header and no records.
    """
    rows = parse_rows(raw)
    if not rows:
        return Table(header=[], records=[])

    header = [h.strip() for h in rows[0]]
    records: List[Record] = []
    for fields in rows[1:]:
        if not any(f.strip() for f in fields):
            continue
        record: Record = {}
        for idx, name in enumerate(header):
            record[name] = fields[idx].strip() if idx < len(fields) else ""
        records.append(record)
    return Table(header=header, records=records)


def parse(raw: Union[str, bytes]) -> List[Record]:
    """Parse CSV text into field-keyed records (header row excluded)."""
    return parse_table(raw).records
