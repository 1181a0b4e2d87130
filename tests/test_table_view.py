import json

from schedule_editor.data.serializer import parse_document
from schedule_editor.logic.hours import DEFAULT_HOUR_TABLE
from schedule_editor.logic.table_view import build_table, is_weekend
from tests.conftest import sample_text


def test_weekend_follows_weekday_alignment():
    doc = parse_document(sample_text())
    view = build_table(doc, DEFAULT_HOUR_TABLE)

    weekend = [h.index for h in view.headers if h.weekend]
    assert weekend == [5, 6]
    for h in view.headers:
        assert h.label == doc.meta.days[h.index]
        assert h.weekday == doc.meta.weekdays[h.index]
        assert h.weekend == is_weekend(doc.meta, h.index)


def test_cells_cover_every_day_even_for_short_shifts():
    doc = parse_document(sample_text())
    row = build_table(doc, DEFAULT_HOUR_TABLE).rows[0]

    assert [c.value for c in row.cells] == ["1", "", "N2", "", "", "", ""]
    assert [c.weekend for c in row.cells][5:] == [True, True]
    assert row.total == 24
    assert row.name == "Zażółć Gęślą"


def test_is_weekend_out_of_range():
    doc = parse_document(sample_text())
    assert not is_weekend(doc.meta, 7)
    assert not is_weekend(doc.meta, -1)


def test_numeric_labels_are_shown_as_text():
    raw = json.loads(sample_text())
    raw["meta"]["days"] = [1, 2, 3, 4, 5, 6, 7]
    raw["workers"][1]["name"] = None
    doc = parse_document(json.dumps(raw))

    view = build_table(doc, DEFAULT_HOUR_TABLE)

    assert [h.label for h in view.headers] == ["1", "2", "3", "4", "5", "6", "7"]
    assert view.rows[1].name == ""
    assert doc.meta.days[0] == 1
