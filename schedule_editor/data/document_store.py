# data/document_store.py
from __future__ import annotations
import logging
from typing import List, Mapping, Optional

from schedule_editor.data.local_cache import DOCUMENT_KEY, LocalCache
from schedule_editor.data.serializer import parse_document, serialize_document
from schedule_editor.exceptions import DocumentParseError, NoDocumentError, WorkerIndexError
from schedule_editor.logic.hours import DEFAULT_HOUR_TABLE, compute_hours, normalize_table
from schedule_editor.models.connection import RemoteLocation, SyncedCopy
from schedule_editor.models.schedule import ScheduleDocument

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    메모리 속 스케줄 문서의 유일한 소유자.
    - 구조화 모델(ScheduleDocument)과 텍스트 쌍을 항상 서로 맞춰 둔다
    - 직원별 합계 시간을 캐시해 두고 변경된 직원만 다시 계산
    - 모든 변경은 로컬 캐시에 바로 저장
    - 원격 버전 토큰(sha)과 그 토큰이 속한 위치도 여기서 보관
    """

    def __init__(self, cache: LocalCache, hour_table: Mapping[str, int] = DEFAULT_HOUR_TABLE):
        self.cache = cache
        self.hour_table = normalize_table(hour_table)

        self._model: Optional[ScheduleDocument] = None
        self._valid = False               # False 면 표 화면 비활성
        self._text = ""
        self._totals: List[int] = []

        self._token: Optional[str] = None
        self._location: Optional[RemoteLocation] = None
        self._synced_text: Optional[str] = None   # 마지막 pull/push 때의 텍스트

    # ---------------- 조회 ----------------
    def get_text(self) -> str:
        return self._text

    def get_model(self) -> Optional[ScheduleDocument]:
        """유효한 문서가 없으면 None (이전 모델을 보여주지 않음)."""
        return self._model if self._valid else None

    def get_aggregate(self, worker_index: int) -> int:
        self._check_worker(worker_index)
        return self._totals[worker_index]

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def location(self) -> Optional[RemoteLocation]:
        return self._location

    @property
    def has_unpushed_changes(self) -> bool:
        # 동기화 기준이 없으면(캐시에서 복원 등) 비어 있지 않은 텍스트는 모두 미반영으로 본다
        return bool(self._text) and self._text != self._synced_text

    def token_for(self, location: RemoteLocation) -> Optional[str]:
        """같은 문서(위치)에서 얻은 토큰만 돌려준다."""
        if self._location != location:
            return None
        return self._token

    # ---------------- 변경 ----------------
    def load_from_text(self, text: str) -> None:
        # 실패해도 사용자가 입력한 텍스트는 그대로 보여줘야 함
        self._text = text
        try:
            doc = parse_document(text)
        except DocumentParseError:
            self._valid = False
            raise
        self._install(doc)
        self.cache.save(DOCUMENT_KEY, text)

    def set_shift(self, worker_index: int, day_index: int, value) -> None:
        doc = self.get_model()
        if doc is None:
            raise NoDocumentError("유효한 문서가 없습니다")
        self._check_worker(worker_index)
        if day_index < 0:
            raise WorkerIndexError(f"잘못된 날짜 인덱스: {day_index}")

        worker = doc.workers[worker_index]
        worker.set_shift(day_index, value)
        self._totals[worker_index] = compute_hours(worker.shifts, self.hour_table)

        self._text = serialize_document(doc)
        self.cache.save(DOCUMENT_KEY, self._text)

    def replace_wholesale(self, copy: SyncedCopy, location: Optional[RemoteLocation] = None) -> Optional[str]:
        """
        pull 결과로 문서를 통째로 교체. 아직 push 안 한 로컬 변경은 버려진다.
        버려진 변경이 있으면 그 텍스트를 돌려준다 (없으면 None).
        토큰은 문서가 깨져 있어도 원격 상태를 가리키므로 항상 교체.
        """
        discarded = None
        if self.has_unpushed_changes and self._text != copy.text:
            discarded = self._text
        self._token = copy.token
        self._location = location
        self._synced_text = copy.text
        if discarded is not None:
            logger.warning("push 하지 않은 로컬 변경을 원격 문서로 덮어씁니다")
        self.load_from_text(copy.text)
        return discarded

    def commit_push(self, location: RemoteLocation, new_token: str, pushed_text: str) -> None:
        self._token = new_token
        self._location = location
        self._synced_text = pushed_text

    def restore_from_cache(self) -> bool:
        """시작 시 캐시 텍스트 복원. 문서가 깨져 있으면 텍스트만 살린다."""
        text = self.cache.load(DOCUMENT_KEY)
        if text is None:
            return False
        try:
            self.load_from_text(text)
        except DocumentParseError as e:
            logger.warning("캐시된 문서를 해석하지 못했습니다: %s", e)
            return False
        return True

    # ---------------- 내부 ----------------
    def _install(self, doc: ScheduleDocument) -> None:
        self._model = doc
        self._valid = True
        self._totals = [compute_hours(w.shifts, self.hour_table) for w in doc.workers]

    def _check_worker(self, worker_index: int) -> None:
        doc = self.get_model()
        count = len(doc.workers) if doc is not None else 0
        if not 0 <= worker_index < count:
            raise WorkerIndexError(f"잘못된 직원 인덱스: {worker_index}")
