# logic/hours.py
from typing import Dict, Iterable, Mapping

# 12시간 근무 코드 (주간 1/2, 야간 N/N1/N2). 그 외 코드와 빈칸은 0시간
DEFAULT_HOUR_TABLE: Dict[str, int] = {"1": 12, "2": 12, "N": 12, "N1": 12, "N2": 12}


def normalize_code(code) -> str:
    if code is None:
        return ""
    return str(code).strip().upper()


def normalize_table(table: Mapping) -> Dict[str, int]:
    """설정에서 읽은 표의 키를 코드와 같은 방식으로 정규화."""
    return {normalize_code(k): v for k, v in table.items()}


def compute_hours(shifts: Iterable, table: Mapping[str, int]) -> int:
    """근무 코드 목록의 총 근무시간. 표에 없는 코드는 0."""
    return sum(table.get(normalize_code(s), 0) for s in shifts)
