"""Exceptions raised while decoding or normalizing a table value."""


class TableMakerError(Exception):
    """Base class for every error raised by the table field."""


class MalformedInput(TableMakerError, ValueError):
    """The raw value is not valid JSON, not an object, or has invalid column definitions."""


class MalformedRow(TableMakerError, IndexError):
    """A row carries more cells than the table has columns."""

    def __init__(self, row_index: int, cell_count: int, column_count: int):
        self.row_index = row_index
        self.cell_count = cell_count
        self.column_count = column_count
        super().__init__(f"Row {row_index} has {cell_count} cells but the table only defines {column_count} columns")
