# logic/table_view.py
"""
문서 → 표 화면용 셀 목록. 위젯에 의존하지 않아서 화면 없이 테스트 가능.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, List, Mapping

from schedule_editor.logic.hours import compute_hours, normalize_code
from schedule_editor.models.schedule import ScheduleDocument, ScheduleMeta

WEEKEND_CODES: FrozenSet[str] = frozenset({"SO", "ND"})   # 토요일, 일요일


@dataclass(frozen=True)
class DayHeader:
    index: int
    label: str
    weekday: str
    weekend: bool


@dataclass(frozen=True)
class CellView:
    worker_index: int
    day_index: int
    value: str
    weekend: bool


@dataclass(frozen=True)
class RowView:
    worker_index: int
    worker_id: object
    name: str
    cells: List[CellView]
    total: int


@dataclass(frozen=True)
class TableView:
    headers: List[DayHeader]
    rows: List[RowView]


def _label(value) -> str:
    # 문서 값은 숫자일 수도 있음. 표시할 때만 문자열로
    return "" if value is None else str(value)


def is_weekend(meta: ScheduleMeta, day_index: int, codes: FrozenSet[str] = WEEKEND_CODES) -> bool:
    # days 와 weekdays 는 같은 인덱스를 쓴다
    if not 0 <= day_index < len(meta.weekdays):
        return False
    return normalize_code(meta.weekdays[day_index]) in codes


def build_table(doc: ScheduleDocument, table: Mapping[str, int],
                weekend_codes: FrozenSet[str] = WEEKEND_CODES) -> TableView:
    meta = doc.meta
    headers = [
        DayHeader(i, _label(label), _label(meta.weekdays[i]), is_weekend(meta, i, weekend_codes))
        for i, label in enumerate(meta.days)
    ]
    rows = []
    for w_idx, worker in enumerate(doc.workers):
        cells = [
            CellView(w_idx, h.index, worker.shift_at(h.index), h.weekend)
            for h in headers
        ]
        rows.append(RowView(
            worker_index=w_idx,
            worker_id=worker.id,
            name=_label(worker.name),
            cells=cells,
            total=compute_hours(worker.shifts, table),
        ))
    return TableView(headers=headers, rows=rows)
