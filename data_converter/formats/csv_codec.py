"""CSV codec — quoting state machine parser and row serializer.

WHY: CSV is flat: a header row followed by data rows of plain strings.
Tree-shaped IR values have to be flattened into rows on the way out,
and rows become an array of string-valued objects on the way in.

HOW: Parsing is a single character scan with an in-quote flag that
splits the text into records of fields. The first record is the
header; each following record becomes an Object mapping header[i] to
field[i]. Serialization collects the union of keys across all row
objects (first-seen order) as the header, then writes one line per
object.

RULES:
- Inside quotes: "" → literal quote, lone " ends quoting, all else literal
- Outside quotes: " opens quoting, "," ends a field, \\n or \\r\\n ends a
  record, anything else (including a lone \\r) is literal
- A trailing newline does not create an empty record
- Header cells are trimmed; duplicate headers overwrite earlier columns
- Missing trailing fields → ""; extra trailing fields are dropped
- Fewer than two records → empty array (not an error)
- Serialize: bare Object is wrapped in a one-element array; anything
  else that is not an array of objects → SerializeError
- Cell text: scalars via text_form, objects/arrays as compact JSON
- "always" quoting wraps every field; "minimal" only when needed
- Lines joined with "\\n", header first, no trailing newline
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from data_converter.core.errors import ErrorKind, SerializeError
from data_converter.core.ir import Array, Object, String, Value, text_form
from data_converter.formats.base import BaseCodec, DataFormat

logger = logging.getLogger(__name__)

# Characters that force a field to be quoted in "minimal" mode.
_NEEDS_QUOTING = frozenset({",", '"', "\r", "\n"})


def split_records(text: str) -> List[List[str]]:
    """Split CSV text into records of raw field strings.

    WHY: Quoted fields may contain commas, quotes and line breaks, so
    neither ``str.split`` nor ``splitlines`` can find record and field
    boundaries.

    HOW: Walk the text once, tracking whether the cursor is inside a
    quoted section. Field and record boundaries only count outside
    quotes.

    Args:
        text: Raw CSV text.

    Returns:
        List of records, each a list of field strings (quotes removed).
    """
    records: List[List[str]] = []
    record: List[str] = []
    current: List[str] = []
    in_quote = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if in_quote:
            if char == '"' and nxt == '"':
                current.append('"')
                i += 1
            elif char == '"':
                in_quote = False
            else:
                current.append(char)
        elif char == '"':
            in_quote = True
        elif char == ",":
            record.append("".join(current))
            current = []
        elif char == "\n" or (char == "\r" and nxt == "\n"):
            if char == "\r":
                i += 1
            record.append("".join(current))
            records.append(record)
            record = []
            current = []
        else:
            current.append(char)
        i += 1

    # Flush the final record unless the text ended on a record boundary
    if current or record:
        record.append("".join(current))
        records.append(record)

    return records


def _quote(field: str, quoting: str) -> str:
    if quoting == "minimal" and not (_NEEDS_QUOTING & set(field)):
        return field
    return '"{}"'.format(field.replace('"', '""'))


def _rows_of(value: Value, codec_format: str) -> List[Object]:
    """Return the row objects of a value, or raise if it has no row shape."""
    if isinstance(value, Object):
        return [value]
    if not isinstance(value, Array):
        raise SerializeError(
            "CSV output needs an array of objects or a single object, got {}.".format(
                value.type_name
            ),
            ErrorKind.UNSUPPORTED_SHAPE,
            codec_format,
        )
    rows: List[Object] = []
    for index, item in enumerate(value.items):
        if not isinstance(item, Object):
            raise SerializeError(
                "CSV output needs every array item to be an object; item {} is {}.".format(
                    index, item.type_name
                ),
                ErrorKind.UNSUPPORTED_SHAPE,
                codec_format,
            )
        rows.append(item)
    return rows


def collect_headers(rows: List[Object]) -> List[str]:
    """Union of keys across rows, in first-seen order."""
    headers: Dict[str, None] = {}
    for row in rows:
        for key in row.fields:
            headers.setdefault(key, None)
    return list(headers)


class CSVCodec(BaseCodec):
    """CSV ⇄ IR (array of flat string records)."""

    format = DataFormat.CSV

    @property
    def name(self) -> str:
        return "CSV"

    @property
    def media_type(self) -> str:
        return "text/csv"

    @property
    def extensions(self) -> Tuple[str, ...]:
        return (".csv",)

    def parse(self, text: str) -> Value:
        records = split_records(text)
        if len(records) < 2:
            logger.debug("CSV input has %d record(s); returning empty array", len(records))
            return Array([])

        headers = [cell.strip() for cell in records[0]]
        rows: List[Value] = []
        for record in records[1:]:
            fields: Dict[str, Value] = {}
            for index, header in enumerate(headers):
                fields[header] = String(record[index] if index < len(record) else "")
            rows.append(Object(fields))

        logger.debug("Parsed CSV: %d column(s), %d row(s)", len(headers), len(rows))
        return Array(rows)

    def serialize(self, value: Value) -> str:
        rows = _rows_of(value, self.format.value)
        if not rows:
            return ""

        quoting = self.options.csv_quoting
        headers = collect_headers(rows)
        lines = [",".join(_quote(header, quoting) for header in headers)]
        with self._serialize_guard():
            for row in rows:
                cells = []
                for header in headers:
                    cell = row.fields.get(header)
                    cells.append(_quote(text_form(cell) if cell is not None else "", quoting))
                # A blank line would not read back as a record
                lines.append(",".join(cells) or '""')
        return "\n".join(lines)
