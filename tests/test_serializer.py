import json

import pytest

from schedule_editor.data.serializer import parse_document, serialize_document
from schedule_editor.exceptions import DocumentParseError
from schedule_editor.models.schedule import ScheduleDocument, ScheduleMeta, Worker
from tests.conftest import sample_text


def test_round_trip_keeps_model():
    doc = ScheduleDocument(
        meta=ScheduleMeta(days=["1", "2"], weekdays=["SO", "ND"]),
        workers=[Worker(id="a7", name="Łukasz Żółw", shifts=["N1"])],
    )
    assert parse_document(serialize_document(doc)) == doc


def test_serialization_is_canonical():
    text = sample_text()
    doc = parse_document(text)
    assert serialize_document(doc) == text
    # 비ASCII 그대로 출력
    assert "Zażółć" in serialize_document(doc)


def test_key_order_is_fixed_and_extras_kept():
    raw = {
        "version": 3,
        "workers": [{"shifts": ["1"], "note": "x", "name": "A", "id": 1}],
        "meta": {"month": "2024-05", "weekdays": ["PN"], "days": ["1"]},
    }
    doc = parse_document(json.dumps(raw))
    out = json.loads(serialize_document(doc))
    assert list(out) == ["meta", "workers", "version"]
    assert list(out["meta"]) == ["days", "weekdays", "month"]
    assert list(out["workers"][0]) == ["id", "name", "shifts", "note"]


def test_null_and_integer_codes_become_strings():
    raw = json.loads(sample_text())
    raw["workers"][0]["shifts"] = [1, None, "N"]
    doc = parse_document(json.dumps(raw))
    assert doc.workers[0].shifts == ["1", "", "N"]


def test_missing_shifts_means_empty():
    raw = json.loads(sample_text())
    del raw["workers"][0]["shifts"]
    assert parse_document(json.dumps(raw)).workers[0].shifts == []


@pytest.mark.parametrize("text", [
    "{not json",
    "[]",
    json.dumps({"workers": []}),
    json.dumps({"meta": {"days": [], "weekdays": []}}),
    json.dumps({"meta": {"days": ["1", "2"], "weekdays": ["PN"]}, "workers": []}),
    json.dumps({"meta": {"days": "1,2", "weekdays": []}, "workers": []}),
    json.dumps({"meta": {"days": [], "weekdays": []}, "workers": ["x"]}),
    json.dumps({"meta": {"days": [], "weekdays": []}, "workers": [{"shifts": "1"}]}),
    json.dumps({"meta": {"days": [], "weekdays": []}, "workers": [{"shifts": [True]}]}),
])
def test_invalid_documents_raise(text):
    with pytest.raises(DocumentParseError):
        parse_document(text)


def test_labels_and_names_keep_their_json_types():
    raw = {
        "meta": {"days": [1, 2, 3], "weekdays": ["PN", None, "ND"]},
        "workers": [{"id": 7, "name": 42, "shifts": ["1"]}],
    }
    doc = parse_document(json.dumps(raw))
    assert doc.meta.days == [1, 2, 3]
    assert doc.meta.weekdays == ["PN", None, "ND"]
    assert doc.workers[0].name == 42
    assert json.loads(serialize_document(doc)) == raw
