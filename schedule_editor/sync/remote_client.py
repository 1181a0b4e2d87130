# sync/remote_client.py
from __future__ import annotations
import asyncio
import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from schedule_editor.data.document_store import DocumentStore
from schedule_editor.data.serializer import parse_document
from schedule_editor.exceptions import (
    DocumentParseError, MissingVersionError, StaleVersionError, SyncInProgressError, ValidationError,
)
from schedule_editor.models.connection import RemoteLocation, SyncedCopy
from schedule_editor.sync.transport import RemoteFile

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def get_file(self, loc: RemoteLocation) -> RemoteFile: ...
    def put_file(self, loc: RemoteLocation, content: str, sha: str, message: str) -> str: ...


@dataclass(frozen=True)
class PullResult:
    copy: SyncedCopy
    discarded: Optional[str] = None     # pull 때문에 사라진 로컬 변경 (없으면 None)


def encode_content(text: str) -> str:
    """UTF-8 바이트 기준 base64 (이름의 한글/폴란드어 문자 보존)."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(content: str) -> str:
    try:
        raw = base64.b64decode(content)   # GitHub 응답의 줄바꿈은 무시됨
    except (binascii.Error, ValueError) as e:
        raise DocumentParseError(f"base64 해석 실패: {e}") from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentParseError(f"UTF-8 문서가 아닙니다: {e}") from e


def default_commit_message(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"업데이트 {now.strftime('%H:%M:%S')}"


class RemoteSyncClient:
    """
    원격 저장소와 문서를 주고받는다.
    - 네트워크 호출만 스레드로 보내고, 문서/토큰 변경은 이벤트 루프 스레드에서만
    - 동시에 하나의 원격 작업만 허용 (진행 중이면 SyncInProgressError)
    """

    def __init__(self, store: DocumentStore, transport: Transport):
        self.store = store
        self.transport = transport
        self._busy: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self._busy is not None

    def _begin(self, op: str) -> None:
        if self._busy is not None:
            raise SyncInProgressError(f"{self._busy} 작업이 진행 중입니다")
        self._busy = op

    def _end(self) -> None:
        self._busy = None

    async def pull(self, location: RemoteLocation) -> PullResult:
        self._begin("pull")
        try:
            remote = await asyncio.to_thread(self.transport.get_file, location)
            # 디코딩 실패 시 보여줄 텍스트가 없으므로 토큰도 받지 않는다
            copy = SyncedCopy(text=decode_content(remote.content), token=remote.sha)
            discarded = self.store.replace_wholesale(copy, location)
        finally:
            self._end()
        logger.info("pull 완료: %s (sha=%s)", location, copy.token)
        return PullResult(copy=copy, discarded=discarded)

    async def push(self, location: RemoteLocation, message: Optional[str] = None,
                   text: Optional[str] = None, token: Optional[str] = None) -> str:
        """
        text/token 을 생략하면 저장소의 현재 값 사용.
        성공하면 새 sha 를 저장소에 바로 반영하고 돌려준다.
        """
        self._begin("push")
        try:
            if text is None:
                text = self.store.get_text()
            try:
                parse_document(text)
            except DocumentParseError as e:
                raise ValidationError(f"JSON 오류로 push 할 수 없습니다: {e}") from e

            current = self.store.token_for(location)
            if token is None:
                token = current
            if not token:
                raise MissingVersionError("버전 정보(sha)가 없습니다. 먼저 pull 하세요")
            if current is None:
                raise MissingVersionError("이 파일에서 받은 버전이 아닙니다. 먼저 pull 하세요")
            if token != current:
                raise StaleVersionError("이미 교체된 버전입니다. 다시 pull 하세요")

            message = message or default_commit_message()
            new_sha = await asyncio.to_thread(
                self.transport.put_file, location, encode_content(text), token, message
            )
            self.store.commit_push(location, new_sha, text)
        finally:
            self._end()
        logger.info("push 완료: %s (sha=%s)", location, new_sha)
        return new_sha
