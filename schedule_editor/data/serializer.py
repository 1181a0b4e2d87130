# data/serializer.py
"""
스케줄 문서 <-> JSON 텍스트 변환.

직렬화는 항상 같은 모양(고정 키 순서, 2칸 들여쓰기, 비ASCII 그대로)으로 출력해서
연속된 push 의 diff 가 최소가 되도록 한다.
"""
from __future__ import annotations
import json
from typing import Any, Dict, List

from schedule_editor.exceptions import DocumentParseError
from schedule_editor.models.schedule import ScheduleDocument, ScheduleMeta, Worker, coerce_code

_DOC_KEYS = ("meta", "workers")
_META_KEYS = ("days", "weekdays")
_WORKER_KEYS = ("id", "name", "shifts")


def _extra(d: Dict[str, Any], known) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if k not in known}


def _to_code(value, where: str) -> str:
    try:
        return coerce_code(value)
    except TypeError as e:
        raise DocumentParseError(f"{where}: {e}") from e


def _parse_labels(meta: Dict[str, Any], key: str) -> List[Any]:
    # 값은 읽은 그대로 (숫자 라벨을 문자열로 바꾸면 push 때 불필요한 diff 발생)
    seq = meta.get(key)
    if not isinstance(seq, list):
        raise DocumentParseError(f"meta.{key} 는 배열이어야 합니다")
    return list(seq)


def _parse_worker(raw, idx: int) -> Worker:
    if not isinstance(raw, dict):
        raise DocumentParseError(f"workers[{idx}] 는 객체여야 합니다")
    shifts = raw.get("shifts")
    if shifts is None:
        shifts = []
    if not isinstance(shifts, list):
        raise DocumentParseError(f"workers[{idx}].shifts 는 배열이어야 합니다")
    return Worker(
        id=raw.get("id"),
        name=raw.get("name"),
        shifts=[_to_code(s, f"workers[{idx}].shifts[{d}]") for d, s in enumerate(shifts)],
        extra=_extra(raw, _WORKER_KEYS),
    )


def document_from_dict(data) -> ScheduleDocument:
    if not isinstance(data, dict):
        raise DocumentParseError("최상위 값은 객체여야 합니다")
    meta = data.get("meta")
    workers = data.get("workers")
    if not isinstance(meta, dict):
        raise DocumentParseError('"meta" 객체가 없습니다')
    if not isinstance(workers, list):
        raise DocumentParseError('"workers" 배열이 없습니다')

    days = _parse_labels(meta, "days")
    weekdays = _parse_labels(meta, "weekdays")
    if len(days) != len(weekdays):
        raise DocumentParseError(
            f"meta.days({len(days)}) 와 meta.weekdays({len(weekdays)}) 길이가 다릅니다"
        )

    return ScheduleDocument(
        meta=ScheduleMeta(days=days, weekdays=weekdays, extra=_extra(meta, _META_KEYS)),
        workers=[_parse_worker(w, i) for i, w in enumerate(workers)],
        extra=_extra(data, _DOC_KEYS),
    )


def parse_document(text: str) -> ScheduleDocument:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise DocumentParseError(f"JSON 형식 오류: {e}") from e
    return document_from_dict(data)


def serialize_document(doc: ScheduleDocument) -> str:
    return json.dumps(doc.to_dict(), ensure_ascii=False, indent=2)
