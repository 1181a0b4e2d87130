# settings.py
import logging
import os
from pathlib import Path

# 프로젝트 루트 = .../schedule_editor
BASE_DIR = Path(__file__).resolve().parent
# 캐시 위치는 환경변수로 바꿀 수 있음 (테스트, 다중 프로필 등)
DATA_DIR = Path(os.getenv("SCHEDULE_EDITOR_DATA_DIR", str(BASE_DIR / "data" / "cache")))

API_URL = os.getenv("SCHEDULE_EDITOR_API_URL", "https://api.github.com")
HTTP_TIMEOUT = 30  # 초
DEFAULT_BRANCH = "main"

LOG_LEVEL = getattr(logging, os.getenv("SCHEDULE_EDITOR_LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_FILE = os.getenv("SCHEDULE_EDITOR_LOG_FILE") or None
