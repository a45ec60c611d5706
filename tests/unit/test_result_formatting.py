"""Unit tests for text rendering of tool results."""

import pytest

from storybook_mcp.services.browser_service import BatchResult
from storybook_mcp.services.tools import format_batch, format_result


class TestFormatResult:
    def test_list_is_newline_joined(self):
        assert format_result(["add", "close", "search"]) == "add\nclose\nsearch"

    def test_list_items_that_are_not_strings(self):
        assert format_result([1, True, None, {"a": 1}]) == '1\ntrue\nnull\n{"a": 1}'

    def test_object_is_pretty_printed(self):
        assert format_result({"count": 2, "names": ["a", "b"]}) == (
            '{\n  "count": 2,\n  "names": [\n    "a",\n    "b"\n  ]\n}'
        )

    @pytest.mark.parametrize(
        "value, expected",
        [("Icon page", "Icon page"), (42, "42"), (1.5, "1.5"), (False, "false"), (None, "null")],
    )
    def test_scalars(self, value, expected):
        assert format_result(value) == expected


class TestFormatBatch:
    def test_sections_follow_requested_order(self):
        batch = BatchResult(
            names=["Input", "Button"],
            results={"Button": "<tr>button</tr>"},
            errors={"Input": 'Component "Input" not found in Storybook'},
        )
        assert format_batch(batch) == (
            "### Input\n\n"
            'Error: Component "Input" not found in Storybook\n\n'
            "### Button\n\n"
            "<tr>button</tr>"
        )

    def test_repeated_names_repeat_sections(self):
        batch = BatchResult(names=["Button", "Button"], results={"Button": "<tr/>"})
        assert format_batch(batch).count("### Button") == 2
