"""Editable-table configuration for the columns editor and the rows editor.

The field's input UI is two editable grids: one where editors define the
columns (heading, width, alignment, type) and one where they fill in the
rows using those columns.  Everything here is plain configuration shaped for
the host's editable-table widget; nothing is persisted or validated beyond
presence checks.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tablemaker.cells import to_iso8601
from tablemaker.host import Namespacer, Translator
from tablemaker.schema import CellType, FieldSettings, TableValue

logger = logging.getLogger(__name__)


# ─── Labels ───────────────────────────────────────────────────────────────────

# Untranslated type labels (host 'app' category)
TYPE_LABELS: dict[CellType, str] = {
    CellType.CHECKBOX: "Checkbox",
    CellType.COLOR: "Color",
    CellType.DATE: "Date",
    CellType.SELECT: "Dropdown",
    CellType.EMAIL: "Email",
    CellType.LIGHTSWITCH: "Lightswitch",
    CellType.MULTILINE: "Multi-line text",
    CellType.NUMBER: "Number",
    CellType.SINGLELINE: "Single-line text",
    CellType.TIME: "Time",
    CellType.URL: "URL",
}

# Built-in editor labels used when the field settings leave them blank
DEFAULT_LABELS: dict[str, str] = {
    "columns_label": "Table Columns",
    "columns_instructions": "Define the columns your table should have.",
    "columns_add_row_label": "Add a column",
    "rows_label": "Table Content",
    "rows_instructions": "Input the content of your table.",
    "rows_add_row_label": "Add a row",
}

# Blank column offered the first time the field is edited
DEFAULT_COLUMN: dict[str, str] = {"heading": "", "align": "", "width": "", "type": CellType.SINGLELINE.value}

_DATE_TYPES = (CellType.DATE, CellType.TIME)


def type_options(t: Translator) -> dict[str, str]:
    """One option per cell type, sorted alphabetically by translated label."""
    labels = {cell_type.value: t("app", label) for cell_type, label in TYPE_LABELS.items()}
    return dict(sorted(labels.items(), key=lambda item: item[1]))


def editor_label(settings: FieldSettings, key: str, t: Translator) -> str:
    """Translated label for ``key`` from the settings record, or the built-in default."""
    return t("tablemaker", getattr(settings, key) or DEFAULT_LABELS[key])


# ─── Column Definitions ───────────────────────────────────────────────────────


def column_settings(t: Translator) -> dict[str, dict[str, Any]]:
    """Column schema of the columns editor itself."""
    return {
        "heading": {
            "heading": t("tablemaker", "Heading"),
            "type": "singleline",
        },
        "width": {
            "heading": t("tablemaker", "Width"),
            "class": "code",
            "type": "singleline",
            "width": 50,
        },
        "align": {
            "heading": t("tablemaker", "Alignment"),
            "class": "thin",
            "type": "select",
            "options": {
                "left": t("tablemaker", "Left"),
                "center": t("tablemaker", "Center"),
                "right": t("tablemaker", "Right"),
            },
        },
        "type": {
            "heading": t("tablemaker", "Type"),
            "class": "thin",
            "type": "select",
            "options": type_options(t),
        },
    }


def dropdown_settings_cols(t: Translator) -> dict[str, dict[str, Any]]:
    """Column schema of the option sub-table shown for select columns."""
    return {
        "label": {
            "heading": t("app", "Option Label"),
            "type": "singleline",
            "autopopulate": "value",
            "class": "option-label",
        },
        "value": {
            "heading": t("app", "Value"),
            "type": "singleline",
            "class": "option-value code",
        },
        "default": {
            "heading": t("app", "Default?"),
            "type": "checkbox",
            "radioMode": True,
            "class": "option-default thin",
        },
    }


def dropdown_settings_config(t: Translator) -> dict[str, Any]:
    """Editable-table config for the option sub-table; the client fills in __ID__ and __NAME__."""
    return {
        "label": t("app", "Dropdown Options"),
        "instructions": t("app", "Define the available options."),
        "id": "__ID__",
        "name": "__NAME__",
        "addRowLabel": t("app", "Add an option"),
        "cols": dropdown_settings_cols(t),
        "initJs": False,
    }


# ─── Editor Rows ──────────────────────────────────────────────────────────────


def resolve_columns(value: TableValue) -> dict[str, dict[str, Any]]:
    """Columns-editor rows keyed 'col0', 'col1', ...; one blank column when none exist."""
    if not value.columns:
        return {"col0": dict(DEFAULT_COLUMN)}

    columns: dict[str, dict[str, Any]] = {}
    for i, col in enumerate(value.columns):
        entry: dict[str, Any] = {
            "heading": col.heading,
            "align": col.align,
            "width": col.width,
            "type": col.type_name,
        }
        if col.type == CellType.SELECT:
            entry["options"] = [opt.model_dump() for opt in col.options or []]
        columns[f"col{i}"] = entry
    return columns


def resolve_rows(value: TableValue, timezone: str | None = None) -> dict[str, dict[str, Any]]:
    """Rows-editor rows keyed 'row0' -> 'col0'; date/time cells become ISO-8601.

    Returns a single empty row when the table has no rows yet.
    """
    if not value.rows:
        return {"row0": {}}

    rows: dict[str, dict[str, Any]] = {}
    for row_index, row in enumerate(value.rows):
        cells: dict[str, Any] = {}
        for col_index, cell in enumerate(row):
            if col_index < len(value.columns) and value.columns[col_index].type in _DATE_TYPES:
                cell = to_iso8601(cell, value.columns[col_index].type, timezone)
            cells[f"col{col_index}"] = cell
        rows[f"row{row_index}"] = cells
    return rows


# ─── Client Payload ───────────────────────────────────────────────────────────


def _script_json(value: Any) -> str:
    """JSON for embedding in an inline <script>; '</' is written as '<\\/'."""
    return json.dumps(value, ensure_ascii=False, default=str).replace("</", "<\\/")


def editor_inputs(handle: str) -> tuple[str, str, str, str]:
    """Un-namespaced (columns id, rows id, columns name, rows name) for a field handle."""
    return f"{handle}-columns", f"{handle}-rows", f"{handle}[columns]", f"{handle}[rows]"


class SettingsPayload(BaseModel):
    """Initialization arguments for the client-side table maker widget, in call order."""

    model_config = ConfigDict(populate_by_name=True)

    field_id: str = Field(alias="fieldId")
    columns_input_id: str = Field(alias="columnsInputId")
    rows_input_id: str = Field(alias="rowsInputId")
    columns_input_name: str = Field(alias="columnsInputName")
    rows_input_name: str = Field(alias="rowsInputName")
    columns: dict[str, dict[str, Any]]
    rows: dict[str, dict[str, Any]]
    column_settings: dict[str, dict[str, Any]] = Field(alias="columnSettings")
    dropdown_settings_html: str = Field(alias="dropdownSettingsHtml")
    dropdown_settings_cols: dict[str, dict[str, Any]] = Field(alias="dropdownSettingsCols")

    def init_js(self) -> str:
        """The ``new Craft.TableMaker(...)`` call that boots the widget."""
        args = ", ".join(_script_json(arg) for arg in self.model_dump().values())
        return f"new Craft.TableMaker({args});"


def build_settings_payload(
    handle: str,
    value: TableValue,
    t: Translator,
    dropdown_settings_html: str = "",
    timezone: str | None = None,
    namespacer: Namespacer | None = None,
) -> SettingsPayload:
    """Assemble everything the client widget needs for one field instance.

    Input ids and names are passed through ``namespacer`` when the field is
    rendered inside a namespaced form.
    """
    columns_id, rows_id, columns_name, rows_name = editor_inputs(handle)
    field_id = handle
    if namespacer is not None:
        field_id = namespacer.namespace_input_id(handle)
        columns_id = namespacer.namespace_input_id(columns_id)
        rows_id = namespacer.namespace_input_id(rows_id)
        columns_name = namespacer.namespace_input_name(columns_name)
        rows_name = namespacer.namespace_input_name(rows_name)

    payload = SettingsPayload(
        field_id=field_id,
        columns_input_id=columns_id,
        rows_input_id=rows_id,
        columns_input_name=columns_name,
        rows_input_name=rows_name,
        columns=resolve_columns(value),
        rows=resolve_rows(value, timezone),
        column_settings=column_settings(t),
        dropdown_settings_html=dropdown_settings_html,
        dropdown_settings_cols=dropdown_settings_cols(t),
    )
    logger.debug("Built settings payload for %s: %d columns, %d rows", handle, len(payload.columns), len(payload.rows))
    return payload
