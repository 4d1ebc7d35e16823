"""Tests for the searchable table engine (pure, no database)."""

import pytest

from app.utils.table_engine import (
    ColumnDef,
    TableEngine,
    equals_value,
    fold_text,
    parse_sort_spec,
    text_search,
)


def _people():
    return [
        {"id": 1, "name": "María", "city": "Habana", "age": 30},
        {"id": 2, "name": "José", "city": "Matanzas", "age": None},
        {"id": 3, "name": "ana", "city": "Habana", "age": 25},
        {"id": 4, "name": "Beatriz", "city": "Cienfuegos", "age": 30},
        {"id": 5, "name": "MARIO", "city": "Holguín", "age": 41},
    ]


COLUMNS = [
    ColumnDef("id", "ID", filterable=False),
    ColumnDef("name", "Nombre"),
    ColumnDef("city", "Ciudad", filter_fn=equals_value),
    ColumnDef("age", "Edad", filterable=False),
    ColumnDef("notes", "Notas", accessor=lambda r: r.get("notes"), sortable=False),
]


def _ids(rows):
    return [r["id"] for r in rows]


def _engine(rows=None, **kwargs):
    return TableEngine(COLUMNS, _people() if rows is None else rows, **kwargs)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_duplicate_column_ids_are_rejected():
    with pytest.raises(ValueError):
        TableEngine([ColumnDef("a", "A"), ColumnDef("a", "A bis")])


def test_non_positive_page_size_is_rejected():
    with pytest.raises(ValueError):
        TableEngine(COLUMNS, page_size=0)
    engine = _engine()
    with pytest.raises(ValueError):
        engine.set_page_size(-1)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def test_twenty_three_rows_in_pages_of_ten():
    rows = [{"id": i} for i in range(1, 24)]
    engine = TableEngine([ColumnDef("id", "ID")], rows, page_size=10)

    assert engine.page_count == 3

    engine.set_page(2)
    assert _ids(engine.get_visible_rows()) == [21, 22, 23]

    engine.set_page(5)
    assert engine.page_index == 2
    assert _ids(engine.get_visible_rows()) == [21, 22, 23]


def test_visible_rows_never_exceed_page_size():
    rows = [{"id": i} for i in range(57)]
    engine = TableEngine([ColumnDef("id", "ID")], rows, page_size=7)
    for index in range(engine.page_count):
        engine.set_page(index)
        assert len(engine.get_visible_rows()) <= 7


def test_set_page_clamps_negative_index_and_empty_table():
    engine = _engine()
    engine.set_page(-3)
    assert engine.page_index == 0

    empty = _engine(rows=[])
    empty.set_page(4)
    assert empty.page_index == 0
    assert empty.page_count == 0
    assert empty.get_visible_rows() == []


def test_next_and_previous_page_stop_at_bounds():
    rows = [{"id": i} for i in range(25)]
    engine = TableEngine([ColumnDef("id", "ID")], rows, page_size=10)

    engine.previous_page()
    assert engine.page_index == 0
    engine.next_page()
    engine.next_page()
    engine.next_page()
    assert engine.page_index == 2
    assert not engine.can_next_page()
    engine.first_page()
    assert engine.page_index == 0
    engine.last_page()
    assert engine.page_index == 2


def test_page_size_change_resets_page_index():
    rows = [{"id": i} for i in range(30)]
    engine = TableEngine([ColumnDef("id", "ID")], rows, page_size=10)
    engine.set_page(2)

    engine.set_page_size(5)

    assert engine.page_index == 0
    assert engine.page_count == 6


def test_filter_change_resets_page_index():
    rows = [{"id": i, "name": f"fila {i}"} for i in range(30)]
    engine = TableEngine([ColumnDef("id", "ID"), ColumnDef("name", "Nombre")], rows, page_size=10)
    engine.set_page(2)

    engine.set_global_search("fila")
    assert engine.page_index == 0

    engine.set_page(1)
    engine.set_filter("name", "1")
    assert engine.page_index == 0


def test_set_rows_keeps_page_index_and_can_show_empty_page():
    rows = [{"id": i} for i in range(25)]
    engine = TableEngine([ColumnDef("id", "ID")], rows, page_size=10)
    engine.set_page(2)

    engine.set_rows(rows[:5])

    assert engine.page_index == 2
    assert engine.get_visible_rows() == []
    view = engine.render()
    assert view.rows == []
    assert view.total == 5
    assert view.empty_message is None


# ---------------------------------------------------------------------------
# Filtering and search
# ---------------------------------------------------------------------------


def test_search_is_case_and_accent_insensitive():
    engine = _engine()

    engine.set_global_search("maria")
    assert _ids(engine.get_visible_rows()) == [1]

    engine.set_global_search("MAR")
    assert _ids(engine.get_visible_rows()) == [1, 5]


def test_fold_text_removes_diacritics():
    assert fold_text("María José Núñez") == "maria jose nunez"
    assert fold_text(None) == ""


def test_empty_search_returns_every_row():
    engine = _engine()
    engine.set_global_search("ana")
    engine.set_global_search("")
    assert _ids(engine.get_visible_rows()) == [1, 2, 3, 4, 5]


def test_filtered_rows_are_exactly_the_matching_rows_in_original_order():
    engine = _engine()
    engine.set_filter("city", "Habana")
    assert _ids(engine.get_filtered_rows()) == [1, 3]


def test_empty_filter_value_removes_the_filter():
    engine = _engine()
    engine.set_filter("city", "Habana")
    engine.set_filter("city", "")
    assert engine.column_filters == {}
    assert len(engine.get_filtered_rows()) == 5


def test_filter_on_non_filterable_column_is_ignored():
    engine = _engine()
    engine.set_filter("age", 30)
    assert engine.column_filters == {}


def test_default_search_skips_non_filterable_columns():
    engine = _engine()
    engine.set_global_search("41")
    assert engine.get_filtered_rows() == []


def test_custom_global_filter_and_column_filter_coexist():
    engine = _engine(global_filter_fn=text_search(lambda r: r["city"]))
    engine.set_global_search("haba")
    assert _ids(engine.get_filtered_rows()) == [1, 3]

    engine.set_filter("name", "an")
    assert _ids(engine.get_filtered_rows()) == [3]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def test_toggle_sort_cycles_back_to_original_order():
    engine = _engine()
    original = _ids(engine.get_visible_rows())

    engine.toggle_sort("name")
    assert engine.get_sort_direction("name") == "asc"
    assert _ids(engine.get_visible_rows()) == [3, 4, 2, 1, 5]

    engine.toggle_sort("name")
    assert engine.get_sort_direction("name") == "desc"
    assert _ids(engine.get_visible_rows()) == [5, 1, 2, 4, 3]

    engine.toggle_sort("name")
    assert engine.get_sort_direction("name") is None
    assert _ids(engine.get_visible_rows()) == original


def test_set_sort_is_idempotent():
    engine = _engine()
    engine.set_sort("name", "asc")
    once = _ids(engine.get_visible_rows())
    engine.set_sort("name", "asc")
    assert _ids(engine.get_visible_rows()) == once
    assert engine.sorting == [("name", "asc")]


def test_sort_is_stable_for_ties():
    engine = _engine()
    engine.set_sort("city", "asc")
    # Both Habana rows keep their original relative order (1 before 3)
    assert _ids(engine.get_visible_rows()) == [4, 1, 3, 5, 2]


def test_missing_values_sort_last_in_both_directions():
    engine = _engine()
    engine.set_sort("age", "asc")
    assert _ids(engine.get_visible_rows())[-1] == 2
    engine.set_sort("age", "desc")
    assert _ids(engine.get_visible_rows())[-1] == 2


def test_multi_column_sort():
    engine = _engine()
    engine.set_sort("age", "desc")
    engine.set_sort("name", "asc", multi=True)
    # age 41, then the two 30s by name (Beatriz, María), then 25, then None
    assert _ids(engine.get_visible_rows()) == [5, 4, 1, 3, 2]


def test_single_sort_replaces_other_columns():
    engine = _engine()
    engine.set_sort("age", "desc")
    engine.toggle_sort("name")
    assert engine.sorting == [("name", "asc")]


def test_unsortable_and_unknown_columns_ignore_sort():
    engine = _engine()
    engine.toggle_sort("notes")
    engine.toggle_sort("does_not_exist")
    assert engine.sorting == []
    assert _ids(engine.get_visible_rows()) == [1, 2, 3, 4, 5]


def test_sort_applies_to_full_filtered_set_not_current_page():
    rows = [{"id": i} for i in range(1, 24)]
    engine = TableEngine([ColumnDef("id", "ID")], rows, page_size=10)
    engine.set_sort("id", "desc")
    assert _ids(engine.get_visible_rows()) == list(range(23, 13, -1))


def test_parse_sort_spec():
    assert parse_sort_spec("total:desc,created_at") == [
        ("total", "desc"),
        ("created_at", "asc"),
    ]
    assert parse_sort_spec(None) == []
    with pytest.raises(ValueError):
        parse_sort_spec("total:up")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def test_loading_shows_no_rows_and_no_empty_message():
    engine = _engine(loading=True)
    view = engine.render()
    assert view.loading is True
    assert view.rows == []
    assert view.empty_message is None
    assert view.show_pagination is False


def test_no_matches_shows_caller_empty_message():
    engine = _engine(empty_message="No se encontraron clientes")
    engine.set_global_search("zzz")
    view = engine.render()
    assert view.rows == []
    assert view.empty_message == "No se encontraron clientes"


def test_single_page_suppresses_pagination():
    view = _engine(page_size=10).render()
    assert view.page_count == 1
    assert view.show_pagination is False
    assert view.summary is None
    assert view.page_label is None
    assert view.empty_message is None


def test_pagination_summary_and_label():
    rows = [{"id": i} for i in range(1, 24)]
    engine = TableEngine([ColumnDef("id", "ID")], rows, page_size=10)
    engine.set_page(1)
    view = engine.render()
    assert view.show_pagination is True
    assert view.summary == "Mostrando 11 a 20 de 23 resultados"
    assert view.page_label == "Página 2 de 3"
    assert view.can_previous_page and view.can_next_page


def test_headers_carry_sort_indicator():
    engine = _engine()
    engine.set_sort("name", "desc")
    headers = {h.id: h for h in engine.render().headers}
    assert headers["name"].sort_direction == "desc"
    assert headers["city"].sort_direction is None
    assert headers["notes"].sortable is False


def test_row_cells_use_accessors():
    engine = _engine()
    cells = engine.row_cells({"id": 9, "name": "Eva", "city": "Trinidad", "age": 3, "notes": "x"})
    assert cells == {"id": 9, "name": "Eva", "city": "Trinidad", "age": 3, "notes": "x"}
