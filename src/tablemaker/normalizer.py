"""Normalization and serialization of the table field value.

``normalize`` runs on every read: it decodes the stored JSON (or posted
form data), applies column defaults once at the boundary, checks that every
row fits the column schema, and attaches a freshly rendered HTML ``table``.
Stored ``columns`` and ``rows`` are never rewritten, so normalizing a
normalized value only recomputes ``table``.

``serialize`` runs right before persistence: it drops associative keys from
columns, rows, row cells and dropdown options so the stored document is made
of plain ordered lists, and leaves the derived ``table`` behind.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from tablemaker import config
from tablemaker.errors import MalformedInput, MalformedRow
from tablemaker.rendering import render_table
from tablemaker.schema import TableValue, dense

logger = logging.getLogger(__name__)


# ─── Decoding ─────────────────────────────────────────────────────────────────


def _load_json(raw: str | bytes) -> Any:
    """JSON-decode a stored value, mapping decode errors to MalformedInput."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"Table value is not valid JSON: {exc}") from exc


def decode(raw: Any) -> TableValue:
    """Turn a JSON string, a posted mapping, or an existing TableValue into a TableValue.

    None and blank strings give an empty value (no columns, no rows).
    """
    if isinstance(raw, TableValue):
        return raw.model_copy()
    if isinstance(raw, (str, bytes)):
        raw = _load_json(raw) if raw.strip() else None
    if raw is None:
        return TableValue()
    if not isinstance(raw, Mapping):
        raise MalformedInput(f"Table value must be a JSON object, got {type(raw).__name__}")

    data = dict(raw)
    data.pop("table", None)
    try:
        return TableValue.model_validate(data)
    except ValidationError as exc:
        raise MalformedInput(f"Invalid table value: {exc}") from exc


# ─── Public Entry Points ──────────────────────────────────────────────────────


def normalize(
    raw: Any,
    strict: bool | None = None,
    escape: bool | None = None,
    timezone: str | None = None,
) -> TableValue:
    """Decode ``raw`` into a fully defaulted TableValue with its rendered ``table``.

    Raises MalformedInput when the value cannot be decoded, and MalformedRow
    when a row has more cells than there are columns.  With ``strict=False``
    the overflowing cells are left out of the rendering instead (the stored
    row is kept as is).
    """
    if strict is None:
        strict = config.STRICT_ROWS

    value = decode(raw)
    n_cols = len(value.columns)

    rendered_rows: list[list[Any]] = []
    for i, row in enumerate(value.rows):
        if len(row) > n_cols:
            if strict:
                raise MalformedRow(i, len(row), n_cols)
            logger.warning("Row %d has %d cells for %d columns; extra cells not rendered", i, len(row), n_cols)
            row = row[:n_cols]
        rendered_rows.append(row)

    logger.debug("Normalized table value: %d columns, %d rows", n_cols, len(value.rows))
    value.table = render_table(value.columns, rendered_rows, escape=escape, timezone=timezone)
    return value


def serialize(value: Any) -> dict[str, Any] | None:
    """Return the storable form of a table value with every associative key dropped.

    Accepts a TableValue, a raw mapping (e.g. posted form data keyed 'col0',
    'row0', ...), or a JSON string.  Keys other than ``columns`` and ``rows``
    on a raw mapping are kept; ``table`` is always removed.
    """
    if value is None:
        return None
    if isinstance(value, TableValue):
        return {
            "columns": [col.to_storage() for col in value.columns],
            "rows": [list(row) for row in value.rows],
        }
    if isinstance(value, (str, bytes)):
        value = _load_json(value)
        if value is None:
            return None
    if not isinstance(value, Mapping):
        raise MalformedInput(f"Cannot serialize table value of type {type(value).__name__}")

    data = dict(value)
    data.pop("table", None)

    if data.get("rows") and isinstance(data["rows"], (list, Mapping)):
        data["rows"] = [dense(row) for row in dense(data["rows"])]

    if data.get("columns") and isinstance(data["columns"], (list, Mapping)):
        columns = []
        for col in dense(data["columns"]):
            if isinstance(col, Mapping) and isinstance(col.get("options"), Mapping):
                col = {**col, "options": dense(col["options"])}
            columns.append(col)
        data["columns"] = columns

    return data


def dumps(value: Any) -> str:
    """Serialize a table value to the compact JSON text stored by the host."""
    return json.dumps(serialize(value), ensure_ascii=False, separators=(",", ":"), default=str)
