"""Unit tests for the Column / DropdownOption / TableValue / FieldSettings models."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from pydantic import ValidationError

from tablemaker.schema import CellType, Column, DropdownOption, FieldSettings, TableValue, dense

# ===========================================================================
# dense
# ===========================================================================


class TestDense:

    def test_mapping_becomes_values_in_order(self):
        assert dense({"col1": "b", "col0": "a"}) == ["b", "a"]

    def test_list_is_unchanged(self):
        value = [1, 2]
        assert dense(value) is value

    def test_scalar_is_unchanged(self):
        assert dense("x") == "x"


# ===========================================================================
# DropdownOption
# ===========================================================================


class TestDropdownOption:

    def test_defaults(self):
        opt = DropdownOption()
        assert (opt.label, opt.value, opt.default) == ("", "", False)

    def test_blank_default_is_false(self):
        assert DropdownOption(label="A", value="a", default="").default is False

    def test_posted_one_is_true(self):
        assert DropdownOption(label="A", value="a", default="1").default is True

    def test_numeric_value_becomes_string(self):
        assert DropdownOption.model_validate({"label": "One", "value": 1}).value == "1"


# ===========================================================================
# Column
# ===========================================================================


class TestColumn:

    def test_empty_column_is_fully_defaulted(self):
        col = Column.model_validate({})
        assert col.heading == ""
        assert col.align == ""
        assert col.width == ""
        assert col.type == CellType.SINGLELINE
        assert col.options is None

    def test_null_fields_are_defaulted(self):
        col = Column.model_validate({"heading": None, "align": None, "width": None, "type": None})
        assert (col.heading, col.align, col.width, col.type) == ("", "", "", CellType.SINGLELINE)

    def test_numeric_width_becomes_string(self):
        assert Column.model_validate({"width": 50}).width == "50"

    def test_known_type_string_becomes_cell_type(self):
        col = Column.model_validate({"type": "date"})
        assert col.type is CellType.DATE
        assert col.type_name == "date"

    def test_unknown_type_is_kept(self):
        col = Column.model_validate({"type": "spreadsheet"})
        assert col.type == "spreadsheet"
        assert col.type_name == "spreadsheet"
        assert col.to_storage()["type"] == "spreadsheet"

    def test_unknown_align_is_kept(self):
        col = Column.model_validate({"align": "justify"})
        assert col.align == "justify"
        assert col.effective_align == "justify"

    def test_json_string_options_are_decoded(self):
        col = Column.model_validate(
            {"type": "select", "options": '[{"label": "Small", "value": "s", "default": true}, {"label": "Large", "value": "l"}]'}
        )
        assert col.options == [
            DropdownOption(label="Small", value="s", default=True),
            DropdownOption(label="Large", value="l", default=False),
        ]

    def test_associative_options_are_densified(self):
        col = Column.model_validate(
            {"type": "select", "options": {"row0": {"label": "A", "value": "a"}, "row1": {"label": "B", "value": "b"}}}
        )
        assert [opt.value for opt in col.options] == ["a", "b"]

    def test_blank_options_string_is_none(self):
        assert Column.model_validate({"options": ""}).options is None

    def test_invalid_options_json_is_rejected(self):
        with pytest.raises(ValidationError):
            Column.model_validate({"type": "select", "options": "[{not json"})

    def test_extra_keys_are_ignored(self):
        col = Column.model_validate({"heading": "A", "handle": "a"})
        assert col.heading == "A"

    def test_effective_align(self):
        assert Column().effective_align == "left"
        assert Column(align="right").effective_align == "right"

    def test_to_storage_omits_missing_options(self):
        assert Column(heading="A").to_storage() == {"heading": "A", "align": "", "width": "", "type": "singleline"}

    def test_to_storage_keeps_options(self):
        col = Column(type=CellType.SELECT, options=[DropdownOption(label="A", value="a")])
        assert col.to_storage()["options"] == [{"label": "A", "value": "a", "default": False}]


# ===========================================================================
# TableValue
# ===========================================================================


class TestTableValue:

    def test_missing_rows_default_to_empty(self):
        assert TableValue.model_validate({"columns": [{}]}).rows == []

    def test_null_rows_and_columns(self):
        value = TableValue.model_validate({"columns": None, "rows": None})
        assert value.columns == []
        assert value.rows == []

    def test_associative_rows_and_cells_are_densified(self):
        value = TableValue.model_validate(
            {"columns": {"col0": {}, "col1": {}}, "rows": {"row0": {"col0": "a", "col1": "b"}, "row1": None}}
        )
        assert len(value.columns) == 2
        assert value.rows == [["a", "b"], []]

    def test_scalar_row_is_rejected(self):
        with pytest.raises(ValidationError):
            TableValue.model_validate({"rows": ["not a row"]})

    def test_table_is_never_dumped(self):
        assert "table" not in TableValue().model_dump()


# ===========================================================================
# FieldSettings
# ===========================================================================


class TestFieldSettings:

    def test_camel_case_keys(self):
        settings = FieldSettings.model_validate({"columnsLabel": "Sizes", "rowsAddRowLabel": "More"})
        assert settings.columns_label == "Sizes"
        assert settings.rows_add_row_label == "More"

    def test_snake_case_keys(self):
        assert FieldSettings(rows_label="Data").rows_label == "Data"

    def test_defaults_are_none(self):
        assert FieldSettings().columns_instructions is None
