"""Test stackview.renderer."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest
from stackview.core.views import StyledValue, View
from stackview.exceptions import OutputWriteError, RendererAlreadyFlushed
from stackview.renderer import TABLE_STYLES, ViewRenderer, resolve_table_style

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

MODULE = "stackview.renderer"

CONDITIONS = View(
    title="Conditions",
    columns=("Name", "Active"),
    rows=(
        {"Name": "beta", "Active": "true"},
        {"Name": "Alpha", "Active": "false"},
        {"Name": "gamma", "Active": "true"},
    ),
    sort_key="Name",
)
PLAN = View(
    title="Terraform plan summary",
    columns=("Action", "Name in Terraform"),
    rows=(
        {"Action": StyledValue("delete, create", bold=True), "Name in Terraform": "aws_iam_role.r"},
        {"Action": StyledValue("create"), "Name in Terraform": "aws_s3_bucket.a"},
    ),
)


def render(*views: View, **kwargs: object) -> str:
    """Render views to a string."""
    stream = io.StringIO()
    renderer = ViewRenderer(stream=stream, **kwargs)  # type: ignore
    renderer.extend(list(views))
    renderer.flush()
    return stream.getvalue()


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Default", "Default"),
        ("default", "Default"),
        ("double-border", "DoubleBorder"),
        ("COLORED_BRIGHT", "ColoredBright"),
        ("Single Border", "SingleBorder"),
    ],
)
def test_resolve_table_style(expected: str, name: str) -> None:
    """Test resolve_table_style."""
    assert resolve_table_style(name) is TABLE_STYLES[expected]


def test_resolve_table_style_unknown() -> None:
    """Test resolve_table_style with an unknown style."""
    with pytest.raises(ValueError, match="unknown table style Fancy"):
        resolve_table_style("Fancy")


class TestViewRenderer:
    """Test ViewRenderer."""

    def test___init___unknown_output(self) -> None:
        """Test unknown output format."""
        with pytest.raises(ValueError, match="unknown output format yaml"):
            ViewRenderer(output="yaml")

    def test_append_after_flush(self) -> None:
        """Views can't be added once flushed."""
        renderer = ViewRenderer(stream=io.StringIO())
        renderer.flush()
        with pytest.raises(RendererAlreadyFlushed):
            renderer.append(CONDITIONS)

    def test_flush_twice(self) -> None:
        """A renderer is flushed exactly once."""
        stream = io.StringIO()
        renderer = ViewRenderer(stream=stream)
        renderer.append(CONDITIONS)
        renderer.flush()
        output = stream.getvalue()
        with pytest.raises(RendererAlreadyFlushed):
            renderer.flush()
        assert stream.getvalue() == output

    def test_flush_os_error(self, mocker: MockerFixture) -> None:
        """Write failures are raised as OutputWriteError."""
        stream = mocker.MagicMock()
        stream.write.side_effect = BrokenPipeError("broken pipe")
        renderer = ViewRenderer(colorize=False, stream=stream)
        renderer.append(CONDITIONS)
        with pytest.raises(OutputWriteError, match="broken pipe"):
            renderer.flush()

    def test_render_table(self) -> None:
        """Tables have a title and rows in sort key order."""
        output = render(CONDITIONS)
        assert "Conditions" in output
        assert output.index("Alpha") < output.index("beta") < output.index("gamma")

    def test_render_table_separate(self) -> None:
        """Views are separated by a blank line unless told otherwise."""
        joined = CONDITIONS.model_copy(update={"separate": False})
        assert render(CONDITIONS, CONDITIONS).count("\n\n") == 1
        assert "\n\n" not in render(joined, CONDITIONS)

    def test_render_table_max_column_width(self) -> None:
        """Long cells are wrapped."""
        view = View(title="Wide", columns=("Name",), rows=({"Name": "x" * 30},))
        output = render(view, max_column_width=10)
        assert "x" * 30 not in output
        assert output.count("x") == 30

    @pytest.mark.parametrize("style", list(TABLE_STYLES))
    def test_render_table_styles(self, style: str) -> None:
        """Every style in the catalog renders."""
        assert "Alpha" in render(CONDITIONS, style=style)

    def test_render_bold(self) -> None:
        """Bold cells are styled on color capable streams."""
        output = render(PLAN, colorize=True)
        assert "\x1b[1mdelete, create\x1b[0m" in output
        assert "\x1b[1mcreate" not in output

    @pytest.mark.parametrize("output", ["csv", "json", "markdown", "html", "table"])
    def test_render_bold_stripped(self, output: str) -> None:
        """Style hints are dropped when colors are not supported."""
        assert "\x1b[" not in render(PLAN, colorize=False, output=output)
        if output != "table":
            assert "\x1b[" not in render(PLAN, colorize=True, output=output)

    def test_render_bold_detected(self, mocker: MockerFixture) -> None:
        """Color support is detected from the stream when not provided."""
        mock_supports_colors = mocker.patch(
            f"{MODULE}.terminal_supports_colors", return_value=False
        )
        assert "\x1b[" not in render(PLAN)
        mock_supports_colors.assert_called()

    def test_render_csv(self) -> None:
        """Test csv output."""
        lines = render(CONDITIONS, output="csv").splitlines()
        assert lines == ["Conditions", "Name,Active", "Alpha,false", "beta,true", "gamma,true"]

    def test_render_html(self) -> None:
        """Test html output."""
        output = render(CONDITIONS, output="html")
        assert "<table>" in output
        assert "Conditions" in output

    def test_render_json(self) -> None:
        """All views are rendered as one JSON document."""
        result = json.loads(render(CONDITIONS, PLAN, output="json"))
        assert result == [
            {
                "title": "Conditions",
                "rows": [
                    {"Name": "Alpha", "Active": "false"},
                    {"Name": "beta", "Active": "true"},
                    {"Name": "gamma", "Active": "true"},
                ],
            },
            {
                "title": "Terraform plan summary",
                "rows": [
                    {"Action": "delete, create", "Name in Terraform": "aws_iam_role.r"},
                    {"Action": "create", "Name in Terraform": "aws_s3_bucket.a"},
                ],
            },
        ]

    def test_render_markdown(self) -> None:
        """Test markdown output."""
        output = render(CONDITIONS, output="markdown")
        assert output.startswith("## Conditions\n\n")
        assert "| Name" in output
        assert output.index("Alpha") < output.index("beta")
