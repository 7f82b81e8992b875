from __future__ import annotations

import pytest

from schemadump.core.errors import UnreachableFormatError
from schemadump.output import ATTRIBUTION, FileFormat, Item, ItemKind, Results

SOURCE_FORMATS = [FileFormat.CS, FileFormat.HPP, FileFormat.RS]


def _non_blank_lines(text: str):
    return [line for line in text.splitlines() if line.strip()]


def test_items_follow_declared_order(results: Results) -> None:
    names = [name for name, _ in results.items()]
    assert names == ["buttons", "interfaces", "offsets", "schemas"]
    kinds = [item.kind for _, item in results.items()]
    assert kinds == list(ItemKind)


def test_item_borrows_collection(results: Results) -> None:
    item = Item.offsets(results.offsets)
    assert item.collection is results.offsets


@pytest.mark.parametrize("file_format", SOURCE_FORMATS)
@pytest.mark.parametrize("kind", list(ItemKind))
def test_source_formats_start_with_banner(results: Results, kind: ItemKind, file_format) -> None:
    item = dict(results.items())[kind.value]
    text = item.generate(results, 4, file_format)
    lines = _non_blank_lines(text)
    assert lines[0] == f"// {ATTRIBUTION}"
    assert lines[1] == "// 2024-03-07 12:34:56.789000 UTC"
    assert text.startswith(f"{lines[0]}\n{lines[1]}\n\n")


@pytest.mark.parametrize("kind", list(ItemKind))
def test_json_has_no_banner(results: Results, kind: ItemKind) -> None:
    item = dict(results.items())[kind.value]
    text = item.generate(results, 4, "json")
    assert ATTRIBUTION not in text
    assert text.startswith("{")


@pytest.mark.parametrize("file_ext", ["cs", "hpp", "json", "rs"])
def test_generate_is_deterministic(schema_results: Results, file_ext: str) -> None:
    for _, item in schema_results.items():
        assert item.generate(schema_results, 4, file_ext) == item.generate(
            schema_results, 4, file_ext
        )


def test_string_and_enum_formats_agree(results: Results) -> None:
    item = Item.buttons(results.buttons)
    assert item.generate(results, 2, "rs") == item.generate(results, 2, FileFormat.RS)


def test_unknown_format_is_fatal(results: Results) -> None:
    with pytest.raises(UnreachableFormatError):
        Item.buttons(results.buttons).generate(results, 4, "py")


def test_indent_width_is_honored(results: Results) -> None:
    item = Item.buttons(results.buttons)
    two = item.generate(results, 2, "cs")
    eight = item.generate(results, 8, "cs")
    assert "\n  // Module:" in two
    assert "\n        // Module:" in eight


def test_banner_attribution_text(results: Results) -> None:
    text = Item.offsets(results.offsets).generate(results, 4, "hpp")
    assert text.splitlines()[0] == "// Generated using schemadump"
