"""Read-only HTML rendering of a normalized table value.

Produces a plain ``<table>`` with one header cell per column and one body
row per data row.  Cells are coerced with ``normalize_cell_value`` before
they are embedded.  The result is wrapped in ``markupsafe.Markup`` so that
templates output it verbatim instead of escaping it a second time.

Heading and cell text is HTML-escaped unless ``escape=False`` (or
``TABLEMAKER_TRUSTED_HTML`` is set), which reproduces the trusted-author
behavior where editors may put inline markup in their tables.  Attribute
values are always escaped.
"""

import html
from collections.abc import Sequence
from typing import Any

from markupsafe import Markup

from tablemaker import config
from tablemaker.cells import normalize_cell_value
from tablemaker.errors import MalformedRow
from tablemaker.schema import Column


def cell_text(value: Any) -> str:
    """String form of a coerced cell: None -> '', True -> '1', False -> ''."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def bind_cells(columns: Sequence[Column], row: Sequence[Any], row_index: int) -> list[tuple[Column, Any]]:
    """Pair each cell with the column at the same position.

    Raises MalformedRow when the row has more cells than there are columns.
    Shorter rows are fine; the missing trailing cells are simply not rendered.
    """
    if len(row) > len(columns):
        raise MalformedRow(row_index, len(row), len(columns))
    return [(columns[i], cell) for i, cell in enumerate(row)]


def render_table(
    columns: Sequence[Column],
    rows: Sequence[Sequence[Any]],
    escape: bool | None = None,
    timezone: str | None = None,
) -> Markup:
    """Render columns and rows as an HTML table string marked safe for templates."""
    if escape is None:
        escape = not config.TRUSTED_HTML

    def text(value: str) -> str:
        return html.escape(value) if escape else value

    lines = ["<table>", "<thead>", "<tr>"]
    for col in columns:
        lines.append(
            f'<th align="{html.escape(col.effective_align)}" width="{html.escape(col.width)}">'
            f"{text(col.heading)}</th>"
        )
    lines += ["</tr>", "</thead>", "<tbody>"]

    for row_index, row in enumerate(rows):
        cells = []
        for col, cell in bind_cells(columns, row, row_index):
            value = normalize_cell_value(col.type, cell, timezone=timezone)
            cells.append(f'<td align="{html.escape(col.effective_align)}">{text(cell_text(value))}</td>')
        lines.append("<tr>" + "".join(cells) + "</tr>")

    lines += ["</tbody>", "</table>"]
    return Markup("\n".join(lines))
