# data/local_cache.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from schedule_editor.logic.hours import DEFAULT_HOUR_TABLE, normalize_table
from schedule_editor.models.connection import ConnectionConfig
from schedule_editor.settings import DATA_DIR

logger = logging.getLogger(__name__)

DOCUMENT_KEY = "schedule_document"
CONFIG_KEY = "connection_config"
HOUR_TABLE_KEY = "hour_table"


class LocalCache:
    """
    키 하나 = 파일 하나 (DATA_DIR/<key>.json).
    - 값은 문자열 그대로 저장 (문서 텍스트는 한 글자도 바꾸지 않음)
    - 저장은 best-effort: 디스크 오류는 로그만 남기고 진행
    - 두 키 사이에 트랜잭션 보장 없음
    """

    def __init__(self, base_dir: Path | str = DATA_DIR):
        self.base_dir = Path(base_dir)

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def save(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            logger.warning("캐시 저장 실패 (%s): %s", key, e)
            return
        logger.debug("캐시 저장: %s (%d자)", key, len(value))

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("캐시 읽기 실패 (%s): %s", key, e)
            return None


# ---------- 연결 설정 ----------
def load_config(cache: LocalCache) -> ConnectionConfig:
    raw = cache.load(CONFIG_KEY)
    if not raw:
        return ConnectionConfig()
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("연결 설정이 손상되어 기본값을 사용합니다")
        return ConnectionConfig()
    if not isinstance(data, dict):
        return ConnectionConfig()
    return ConnectionConfig.from_dict(data)


def save_config(cache: LocalCache, config: ConnectionConfig) -> None:
    cache.save(CONFIG_KEY, json.dumps(config.to_dict(), ensure_ascii=False, indent=2))


# ---------- 근무시간 표 ----------
def load_hour_table(cache: LocalCache) -> Dict[str, int]:
    """
    {"1": 12, "N": 12, "D8": 8, ...} 형태의 사용자 표. 없거나 잘못되면 기본 표.
    """
    raw = cache.load(HOUR_TABLE_KEY)
    if not raw:
        return dict(DEFAULT_HOUR_TABLE)
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("근무시간 표가 손상되어 기본 표를 사용합니다")
        return dict(DEFAULT_HOUR_TABLE)
    if not isinstance(data, dict) or not all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in data.values()
    ):
        logger.warning("근무시간 표 형식이 올바르지 않아 기본 표를 사용합니다")
        return dict(DEFAULT_HOUR_TABLE)
    return normalize_table(data)
