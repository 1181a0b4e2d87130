# utils/logging_setup.py
import logging
import sys
from pathlib import Path


def setup_logging(level: int = logging.INFO, log_file: str | None = None):
    """
    콘솔 + (선택) 파일 로그 설정.
    - 파일에는 항상 DEBUG 까지 기록
    """
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s [%(name)s] %(message)s", datefmt="%H:%M:%S"
    ))
    console.setLevel(level)
    handlers = [console]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(
            fmt="[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        ))
        fh.setLevel(logging.DEBUG)
        handlers.append(fh)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 라이브러리 로그 줄이기
    logging.getLogger("urllib3").setLevel(logging.WARNING)
