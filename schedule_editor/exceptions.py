# exceptions.py


class ScheduleEditorError(Exception):
    """모든 편집기 오류의 공통 부모."""


# ---------- 문서 ----------
class DocumentParseError(ScheduleEditorError):
    """텍스트가 스케줄 문서 형식이 아님."""


class NoDocumentError(ScheduleEditorError):
    """유효한 문서가 없는 상태에서 셀 편집 시도."""


class WorkerIndexError(ScheduleEditorError, IndexError):
    """범위를 벗어난 직원/날짜 인덱스."""


# ---------- 동기화 ----------
class ValidationError(ScheduleEditorError):
    """push 하려는 텍스트가 올바른 문서가 아님. 원격은 호출하지 않는다."""


class MissingVersionError(ScheduleEditorError):
    """버전 토큰(sha) 없음 → 먼저 pull 해야 함."""


class SyncInProgressError(ScheduleEditorError):
    """다른 pull/push 가 아직 진행 중."""


class TransportError(ScheduleEditorError):
    def __init__(self, status: int | None, message: str):
        self.status = status
        self.message = message
        label = f"HTTP {status}" if status is not None else "네트워크 오류"
        super().__init__(f"{label}: {message}")


class AuthenticationError(TransportError):
    """401/403: 토큰 없음, 만료, 권한 부족."""


class ConflictError(TransportError):
    """원격 버전이 제출한 토큰과 다름 → 다시 pull 후 재시도."""


class StaleVersionError(ConflictError):
    """이미 교체된 예전 토큰으로 push 시도 (네트워크 호출 전 거부)."""

    def __init__(self, message: str):
        super().__init__(None, message)
