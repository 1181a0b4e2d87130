# sync/transport.py
"""
GitHub contents API 전송 계층 (requests 기반, 동기 호출).

    GET /repos/{owner}/{repo}/contents/{path}?ref={branch} → {content: base64, sha}
    PUT /repos/{owner}/{repo}/contents/{path}  {message, content, sha, branch} → {content: {sha}}

HTTP 상태코드를 편집기 예외로 바꾸는 것까지만 담당. base64 인코딩/디코딩은 호출하는 쪽 몫.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import requests

from schedule_editor.exceptions import AuthenticationError, ConflictError, TransportError
from schedule_editor.models.connection import RemoteLocation
from schedule_editor.settings import API_URL, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteFile:
    content: str        # base64 (줄바꿈 포함 가능)
    sha: str


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.reason or f"HTTP {resp.status_code}"


def raise_for_status(resp: requests.Response) -> None:
    if resp.ok:
        return
    status = resp.status_code
    message = _error_message(resp)
    if status in (401, 403):
        raise AuthenticationError(status, message)
    # 409: sha 불일치. 422 도 sha 가 맞지 않으면 같은 의미
    if status == 409 or (status == 422 and "sha" in message.lower()):
        raise ConflictError(status, message)
    raise TransportError(status, message)


class GitHubContentsTransport:
    def __init__(self, auth_token: str, api_url: str = API_URL,
                 session: Optional[requests.Session] = None, timeout: float = HTTP_TIMEOUT):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {auth_token}",
            "Accept": "application/vnd.github+json",
        })

    def _url(self, loc: RemoteLocation) -> str:
        return (f"{self.api_url}/repos/{quote(loc.owner, safe='')}/{quote(loc.repo, safe='')}"
                f"/contents/{quote(loc.path.strip('/'), safe='/')}")

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(None, str(e)) from e
        raise_for_status(resp)
        return resp

    def get_file(self, loc: RemoteLocation) -> RemoteFile:
        resp = self._send("GET", self._url(loc), params={"ref": loc.branch})
        data = resp.json()
        if not isinstance(data, dict) or "content" not in data or "sha" not in data:
            # 디렉터리 경로면 배열이 돌아온다
            raise TransportError(resp.status_code, f"{loc.path} 은(는) 파일이 아닙니다")
        logger.debug("GET %s → sha=%s", loc, data["sha"])
        return RemoteFile(content=data["content"], sha=data["sha"])

    def put_file(self, loc: RemoteLocation, content: str, sha: str, message: str) -> str:
        payload = {"message": message, "content": content, "sha": sha, "branch": loc.branch}
        resp = self._send("PUT", self._url(loc), json=payload)
        data = resp.json()
        try:
            new_sha = data["content"]["sha"]
        except (KeyError, TypeError) as e:
            raise TransportError(resp.status_code, "응답에 새 sha 가 없습니다") from e
        logger.debug("PUT %s → sha=%s", loc, new_sha)
        return new_sha
