# models/schedule.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

EMPTY_CODE = ""


def coerce_code(value) -> str:
    # null → 빈칸, 정수 → 문자열 ("1" 대신 1 로 적는 경우)
    if value is None:
        return EMPTY_CODE
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"근무 코드는 문자열이어야 합니다 ({value!r})")


@dataclass
class ScheduleMeta:
    days: List[Any] = field(default_factory=list)       # [1, 2, ...] 또는 ["1", "2", ...] 날짜 라벨 (읽은 그대로)
    weekdays: List[Any] = field(default_factory=list)   # ["PN", "WT", ..., "SO", "ND"] days 와 인덱스 정렬
    extra: Dict[str, Any] = field(default_factory=dict)  # 알 수 없는 키 보존

    def to_dict(self) -> Dict[str, Any]:
        d = {"days": list(self.days), "weekdays": list(self.weekdays)}
        d.update(self.extra)
        return d


@dataclass
class Worker:
    id: Any
    name: Any
    shifts: List[str] = field(default_factory=list)     # 날짜 인덱스별 근무 코드 (days 보다 짧을 수 있음)
    extra: Dict[str, Any] = field(default_factory=dict)

    def shift_at(self, day_index: int) -> str:
        if 0 <= day_index < len(self.shifts):
            return self.shifts[day_index]
        return EMPTY_CODE

    def set_shift(self, day_index: int, value) -> None:
        value = coerce_code(value)   # 텍스트로 다시 읽었을 때와 같은 값만 저장
        # 중간 빈칸은 빈 코드로 채운다
        if len(self.shifts) <= day_index:
            self.shifts.extend([EMPTY_CODE] * (day_index + 1 - len(self.shifts)))
        self.shifts[day_index] = value

    def to_dict(self) -> Dict[str, Any]:
        d = {"id": self.id, "name": self.name, "shifts": list(self.shifts)}
        d.update(self.extra)
        return d


@dataclass
class ScheduleDocument:
    meta: ScheduleMeta
    workers: List[Worker] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "meta": self.meta.to_dict(),
            "workers": [w.to_dict() for w in self.workers],
        }
        d.update(self.extra)
        return d
