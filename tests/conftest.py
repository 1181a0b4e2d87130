import base64
import json

import pytest

from schedule_editor.data.document_store import DocumentStore
from schedule_editor.data.local_cache import LocalCache
from schedule_editor.exceptions import ConflictError
from schedule_editor.models.connection import RemoteLocation
from schedule_editor.sync.transport import RemoteFile

SAMPLE = {
    "meta": {
        "days": ["1", "2", "3", "4", "5", "6", "7"],
        "weekdays": ["PN", "WT", "ŚR", "CZ", "PT", "SO", "ND"],
    },
    "workers": [
        {"id": 1, "name": "Zażółć Gęślą", "shifts": ["1", "", "N2"]},
        {"id": 2, "name": "김철수", "shifts": ["2", "2", "x", "N", "", "1", "n1"]},
    ],
}


def sample_text(doc=None) -> str:
    return json.dumps(doc or SAMPLE, ensure_ascii=False, indent=2)


@pytest.fixture
def cache(tmp_path):
    return LocalCache(tmp_path / "cache")


@pytest.fixture
def store(cache):
    return DocumentStore(cache)


@pytest.fixture
def location():
    return RemoteLocation("acme", "grafik", "data/grafik.json", "main")


class FakeRemote:
    """
    GitHub contents API 흉내. sha 가 현재 값과 다르면 409 처럼 거부한다.
    """

    def __init__(self):
        self.files = {}
        self.calls = []
        self._seq = 0

    def _next_sha(self) -> str:
        self._seq += 1
        return f"sha{self._seq}"

    def seed(self, loc, text: str) -> str:
        sha = self._next_sha()
        self.files[loc] = (text.encode("utf-8"), sha)
        return sha

    def current_sha(self, loc) -> str:
        return self.files[loc][1]

    def get_file(self, loc):
        self.calls.append(("GET", loc))
        raw, sha = self.files[loc]
        encoded = base64.b64encode(raw).decode("ascii")
        # GitHub 는 60자마다 줄바꿈을 넣는다
        wrapped = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60))
        return RemoteFile(content=wrapped, sha=sha)

    def put_file(self, loc, content, sha, message):
        self.calls.append(("PUT", loc, sha, message))
        if self.files[loc][1] != sha:
            raise ConflictError(409, "does not match")
        new_sha = self._next_sha()
        self.files[loc] = (base64.b64decode(content), new_sha)
        return new_sha


@pytest.fixture
def remote(location):
    fake = FakeRemote()
    fake.seed(location, sample_text())
    return fake
