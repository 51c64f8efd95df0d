"""Pydantic models for the table field value and its settings record.

``Column.model_validate`` is the single place where a partially specified
column (missing heading/align/width/type, JSON-encoded or associative
``options``) becomes a fully populated column.  ``TableValue`` applies the
same treatment to the whole value, densifying associative ``columns`` and
``rows`` in insertion order so that storage order is the schema.
"""

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from markupsafe import Markup
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CellType(str, Enum):
    """Editor widget (and coercion rule) used for every cell in a column."""

    SINGLELINE = "singleline"
    MULTILINE = "multiline"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    LIGHTSWITCH = "lightswitch"
    COLOR = "color"
    DATE = "date"
    TIME = "time"
    EMAIL = "email"
    URL = "url"
    SELECT = "select"


def dense(value: Any) -> Any:
    """Drop associative keys: a mapping becomes the list of its values, in insertion order."""
    if isinstance(value, Mapping):
        return list(value.values())
    return value


class DropdownOption(BaseModel):
    """One choice offered by a ``select`` column."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    label: str = ""
    value: str = ""
    default: bool = False

    @field_validator("label", "value", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("default", mode="before")
    @classmethod
    def _blank_is_false(cls, value: Any) -> Any:
        # Posted radio/checkbox cells arrive as "" or "1"
        if value is None or value == "":
            return False
        return value


class Column(BaseModel):
    """Fully defaulted column definition.

    Missing ``heading``, ``align`` and ``width`` become ``""``; a missing or
    blank ``type`` becomes ``singleline``.  ``options`` is decoded from a JSON
    string or an associative mapping into a dense list of DropdownOption.
    ``align`` and ``type`` values outside the known sets are kept as stored.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    heading: str = ""
    align: str = ""
    width: str = ""
    # Unknown type names are kept as plain strings and render unchanged
    type: CellType | str = Field(default=CellType.SINGLELINE, union_mode="left_to_right")
    options: list[DropdownOption] | None = None

    @field_validator("heading", "align", "width", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("type", mode="before")
    @classmethod
    def _blank_type_is_singleline(cls, value: Any) -> Any:
        if value is None or value == "":
            return CellType.SINGLELINE
        return value

    @field_validator("options", mode="before")
    @classmethod
    def _decode_options(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)):
            if not value.strip():
                return None
            # JSONDecodeError is a ValueError, so pydantic reports it as a validation error
            value = json.loads(value)
        return dense(value)

    @property
    def effective_align(self) -> str:
        """Alignment used for rendering; an unset alignment renders as 'left'."""
        return self.align or "left"

    @property
    def type_name(self) -> str:
        """The stored type string, whether or not it is a known CellType."""
        return self.type.value if isinstance(self.type, CellType) else self.type

    def to_storage(self) -> dict[str, Any]:
        """Plain dict for persistence; ``options`` is omitted when the column has none."""
        return self.model_dump(mode="json", exclude_none=True)


class TableValue(BaseModel):
    """The field's full value: ordered columns, ordered rows, and the derived HTML.

    ``table`` is recomputed by ``normalize`` on every call and is excluded
    from every dump, so it never reaches storage.
    """

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    columns: list[Column] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
    table: Markup | None = Field(default=None, exclude=True)

    @field_validator("columns", mode="before")
    @classmethod
    def _dense_columns(cls, value: Any) -> Any:
        return [] if value is None else dense(value)

    @field_validator("rows", mode="before")
    @classmethod
    def _dense_rows(cls, value: Any) -> Any:
        if value is None:
            return []
        value = dense(value)
        if isinstance(value, list):
            return [[] if row is None else dense(row) for row in value]
        return value


class FieldSettings(BaseModel):
    """Per-field labels for the columns and rows editors.

    Keys are stored camelCased by the host (``columnsLabel`` ...).  A blank
    value means "use the built-in default".
    """

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    columns_label: str | None = None
    columns_instructions: str | None = None
    columns_add_row_label: str | None = None
    rows_label: str | None = None
    rows_instructions: str | None = None
    rows_add_row_label: str | None = None
