"""User-definable table field: column schema, cell coercion, and HTML rendering.

Submodules:
  config           -- environment-driven defaults (escaping, strict rows, timezone)
  errors           -- MalformedInput / MalformedRow exception hierarchy
  schema           -- Column, DropdownOption, TableValue, FieldSettings Pydantic models
  cells            -- per-type cell coercion (color, date, time)
  rendering        -- read-only HTML table rendering
  normalizer       -- normalize() / serialize() entry points
  settings_schema  -- editable-table configuration for the columns and rows editors
  field            -- TableMakerField facade wiring host collaborators together
"""

from tablemaker.errors import MalformedInput, MalformedRow, TableMakerError
from tablemaker.field import TableMakerField
from tablemaker.normalizer import dumps, normalize, serialize
from tablemaker.schema import CellType, Column, DropdownOption, FieldSettings, TableValue

__all__ = [
    "CellType",
    "Column",
    "DropdownOption",
    "FieldSettings",
    "MalformedInput",
    "MalformedRow",
    "TableMakerError",
    "TableMakerField",
    "TableValue",
    "dumps",
    "normalize",
    "serialize",
]
