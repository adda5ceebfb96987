"""Render views to standard output."""

from __future__ import annotations

import csv
import html
import io
import json
import logging
import re
import sys
from typing import TYPE_CHECKING, Any, NamedTuple, TextIO, cast

from humanfriendly.terminal import terminal_supports_colors  # type: ignore
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .exceptions import OutputWriteError, RendererAlreadyFlushed

if TYPE_CHECKING:
    from ._logging import StackviewLogger
    from .core.views import View

LOGGER = cast("StackviewLogger", logging.getLogger(__name__))

CONSOLE_WIDTH = 1000
"""Wide enough that only ``max_column_width`` wraps cells."""


class TableStyle(NamedTuple):
    """Borders and header styling of a table."""

    box: box.Box
    header_style: str = "bold"


TABLE_STYLES: dict[str, TableStyle] = {
    "Default": TableStyle(box.ASCII),
    "Bold": TableStyle(box.HEAVY),
    "ColoredBright": TableStyle(box.SQUARE, "bold bright_white on blue"),
    "ColoredDark": TableStyle(box.SQUARE, "bold cyan on black"),
    "DoubleBorder": TableStyle(box.DOUBLE),
    "Markdown": TableStyle(box.MARKDOWN),
    "Minimal": TableStyle(box.MINIMAL),
    "Rounded": TableStyle(box.ROUNDED),
    "Simple": TableStyle(box.SIMPLE),
    "SingleBorder": TableStyle(box.SQUARE),
}
"""Catalog of table styles that can be selected with ``table.style``."""

OUTPUT_FORMATS = ("csv", "html", "json", "markdown", "table")


def _normalize_style_name(name: str) -> str:
    return re.sub(r"[^a-z]", "", name.lower())


def resolve_table_style(name: str) -> TableStyle:
    """Find a table style by name, ignoring case and separators.

    Raises:
        ValueError: The style is not part of the catalog.

    """
    normalized = _normalize_style_name(name)
    for style_name, style in TABLE_STYLES.items():
        if _normalize_style_name(style_name) == normalized:
            return style
    raise ValueError(
        f"unknown table style {name}; choose from {', '.join(TABLE_STYLES)}"
    )


class ViewRenderer:
    """Buffer views and write them to a stream in one go.

    A renderer is flushed exactly once.

    """

    def __init__(
        self,
        *,
        colorize: bool | None = None,
        max_column_width: int = 50,
        output: str = "table",
        stream: TextIO | None = None,
        style: str = "Default",
    ) -> None:
        """Instantiate class.

        Args:
            colorize: Whether to honor style hints on cells. Detected from
                ``stream`` when not provided.
            max_column_width: Maximum width of a column in table output.
            output: Output format.
            stream: Stream to write to. Defaults to standard output.
            style: Name of a table style from :data:`TABLE_STYLES`.

        """
        if output not in OUTPUT_FORMATS:
            raise ValueError(f"unknown output format {output}")
        self.max_column_width = max_column_width
        self.output = output
        self.stream = stream or sys.stdout
        self.style = resolve_table_style(style)
        self.colorize = colorize
        self._buffer: list[View] = []
        self._flushed = False

    @property
    def supports_colors(self) -> bool:
        """Whether style hints are rendered."""
        if self.output != "table":
            return False
        if self.colorize is not None:
            return self.colorize
        return bool(terminal_supports_colors(self.stream))

    def append(self, view: View) -> None:
        """Buffer a view to be written on :meth:`flush`.

        Raises:
            RendererAlreadyFlushed: The renderer was already flushed.

        """
        if self._flushed:
            raise RendererAlreadyFlushed
        self._buffer.append(view)

    def extend(self, views: list[View]) -> None:
        """Buffer multiple views."""
        for view in views:
            self.append(view)

    def flush(self) -> None:
        """Write every buffered view to the stream.

        Raises:
            OutputWriteError: Writing to the stream failed.
            RendererAlreadyFlushed: The renderer was already flushed.

        """
        if self._flushed:
            raise RendererAlreadyFlushed
        self._flushed = True
        views, self._buffer = self._buffer, []
        LOGGER.debug("rendering %s view(s) as %s", len(views), self.output)
        try:
            if self.output == "json":
                self.stream.write(self.render_json(views))
            else:
                for index, view in enumerate(views):
                    self.stream.write(self.render(view))
                    if view.separate and index < len(views) - 1:
                        self.stream.write("\n")
            self.stream.flush()
        except OSError as err:
            raise OutputWriteError(str(err)) from err

    def render(self, view: View) -> str:
        """Render a single view to a string ending with a newline."""
        if self.output == "csv":
            return self.render_csv(view)
        if self.output == "html":
            return self.render_html(view)
        if self.output == "markdown":
            return f"## {view.title}\n\n{self.print_table(view, TABLE_STYLES['Markdown'])}"
        return self.print_table(view, self.style, title=view.title)

    def render_csv(self, view: View) -> str:
        """Render a view as its title followed by CSV records."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(view.columns)
        for row in view.sorted_rows():
            writer.writerow([self.format_cell(row.get(column, "")) for column in view.columns])
        return f"{view.title}\n{buffer.getvalue()}"

    def render_html(self, view: View) -> str:
        """Render a view as an HTML table with the title as its caption."""
        lines = ["<table>", f"    <caption>{html.escape(view.title)}</caption>", "    <tr>"]
        lines.extend(f"        <th>{html.escape(column)}</th>" for column in view.columns)
        lines.append("    </tr>")
        for row in view.sorted_rows():
            lines.append("    <tr>")
            lines.extend(
                f"        <td>{html.escape(self.format_cell(row.get(column, '')))}</td>"
                for column in view.columns
            )
            lines.append("    </tr>")
        lines.append("</table>")
        return "\n".join(lines) + "\n"

    def render_json(self, views: list[View]) -> str:
        """Render views as a single JSON document."""
        return (
            json.dumps(
                [
                    {
                        "title": view.title,
                        "rows": [
                            {
                                column: self.format_cell(row.get(column, ""))
                                for column in view.columns
                            }
                            for row in view.sorted_rows()
                        ],
                    }
                    for view in views
                ],
                indent=4,
            )
            + "\n"
        )

    def build_table(self, view: View, style: TableStyle, title: str | None = None) -> Table:
        """Create the table of a view with its rows in display order."""
        table = Table(
            title=Text(title) if title else None,
            box=style.box,
            header_style=style.header_style,
            title_style="bold",
            show_edge=True,
        )
        for column in view.columns:
            table.add_column(column, max_width=self.max_column_width, overflow="fold")
        for row in view.sorted_rows():
            table.add_row(*(self.cell_text(row.get(column, "")) for column in view.columns))
        return table

    def print_table(self, view: View, style: TableStyle, title: str | None = None) -> str:
        """Print the table of a view on a private console and return the text."""
        colors = self.supports_colors
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            color_system="standard" if colors else None,
            force_terminal=colors,
            highlight=False,
            width=CONSOLE_WIDTH,
        )
        console.print(self.build_table(view, style, title=title))
        return buffer.getvalue()

    def cell_text(self, value: Any) -> Text:
        """Table cell with the style hint applied when colors are supported."""
        bold = getattr(value, "bold", False) and self.supports_colors
        return Text(self.format_cell(value), style="bold" if bold else "")

    @staticmethod
    def format_cell(value: Any) -> str:
        """Plain text of a cell."""
        return "" if value is None else str(value)
