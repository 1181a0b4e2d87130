# models/connection.py
from dataclasses import dataclass, asdict
from typing import Optional

from schedule_editor.settings import DEFAULT_BRANCH


@dataclass(frozen=True)
class RemoteLocation:
    owner: str
    repo: str
    path: str                          # 저장소 내 파일 경로 (예: "data/grafik.json")
    branch: str = DEFAULT_BRANCH

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}:{self.path}@{self.branch}"


@dataclass(frozen=True)
class SyncedCopy:
    text: str                          # 원격에서 받은 그대로의 문서 텍스트
    token: str                         # 해당 내용의 sha


@dataclass
class ConnectionConfig:
    token: str = ""                    # 접근 토큰 (로그에 남기지 않음)
    owner: str = ""
    repo: str = ""
    path: str = ""
    branch: str = DEFAULT_BRANCH

    @property
    def location(self) -> RemoteLocation:
        return RemoteLocation(self.owner, self.repo, self.path, self.branch or DEFAULT_BRANCH)

    def is_complete(self) -> bool:
        return bool(self.token and self.repo and self.path)

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: Optional[dict]) -> "ConnectionConfig":
        data = data or {}
        return ConnectionConfig(
            token=str(data.get("token") or "").strip(),
            owner=str(data.get("owner") or "").strip(),
            repo=str(data.get("repo") or "").strip(),
            path=str(data.get("path") or "").strip(),
            branch=str(data.get("branch") or "").strip() or DEFAULT_BRANCH,
        )
