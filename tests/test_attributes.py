from richsmith.core.attributes import (
    attrs_to_string,
    attrs_to_style,
    clean_attributes,
    escape_html,
    process_attributes,
    table_cell_attributes,
)


def test_escape_html_covers_all_special_characters() -> None:
    assert escape_html("<a href=\"x\">Tom & Jerry's</a>") == (
        "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#039;s&lt;/a&gt;"
    )


def test_escape_html_tolerates_none() -> None:
    assert escape_html(None) == ""


def test_clean_attributes_drops_none_only() -> None:
    assert clean_attributes({"a": None, "b": 0, "c": "", "d": False}) == {
        "b": 0,
        "c": "",
        "d": False,
    }


def test_process_attributes_merges_text_align_into_style() -> None:
    attrs = {"textAlign": "center", "class": "lead", "id": None, "data-x": "1"}
    assert process_attributes(attrs) == {
        "data-x": "1",
        "class": "lead",
        "style": "text-align: center;",
    }


def test_process_attributes_terminates_existing_style() -> None:
    result = process_attributes({"style": "color: red", "textAlign": "left"})
    assert result == {"style": "color: red; text-align: left;"}


def test_process_attributes_keeps_terminated_style() -> None:
    assert process_attributes({"style": "color: red;"}) == {"style": "color: red;"}


def test_process_attributes_without_input() -> None:
    assert process_attributes() == {}
    assert process_attributes(None) == {}


def test_table_cell_attributes_drops_unit_spans() -> None:
    attrs = {"colspan": 1, "colwidth": 100, "textAlign": "center"}
    assert table_cell_attributes(attrs) == {"style": "width: 100px; text-align: center;"}


def test_table_cell_attributes_keeps_wide_spans_and_orders_styles() -> None:
    attrs = {
        "colspan": 2,
        "rowspan": "3",
        "textAlign": "right",
        "backgroundColor": "#eee",
        "colwidth": [120],
    }
    assert table_cell_attributes(attrs) == {
        "colspan": 2,
        "rowspan": "3",
        "style": "width: 120px; background-color: #eee; text-align: right;",
    }


def test_table_cell_attributes_ignores_non_numeric_spans() -> None:
    assert table_cell_attributes({"colspan": "wide", "rowspan": True}) == {}


def test_attrs_to_style() -> None:
    assert attrs_to_style({"color": "red", "font-weight": "bold"}) == (
        "color: red; font-weight: bold"
    )
    assert attrs_to_style({}) == ""
    assert attrs_to_style(None) == ""


def test_attrs_to_string_flattens_custom_and_skips_none() -> None:
    attrs = {
        "href": "/about",
        "title": None,
        "custom": {"rel": "noopener", "data-track": "nav"},
    }
    assert attrs_to_string(attrs) == 'href="/about" rel="noopener" data-track="nav"'


def test_attrs_to_string_serialises_booleans_and_escapes_values() -> None:
    attrs = {"draggable": False, "hidden": True, "title": 'say "hi" & <go>'}
    assert attrs_to_string(attrs) == (
        'draggable="false" hidden="true" title="say &quot;hi&quot; &amp; &lt;go&gt;"'
    )


def test_attrs_to_string_skips_nested_payloads() -> None:
    assert attrs_to_string({"href": "/x", "story": {"full_slug": "x"}}) == 'href="/x"'


def test_attrs_to_string_empty() -> None:
    assert attrs_to_string({}) == ""
    assert attrs_to_string(None) == ""
