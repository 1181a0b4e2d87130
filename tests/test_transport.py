from unittest.mock import MagicMock

import pytest
import requests

from schedule_editor.exceptions import AuthenticationError, ConflictError, TransportError
from schedule_editor.sync.transport import GitHubContentsTransport


def _resp(status, payload=None, reason="Error"):
    r = MagicMock()
    r.status_code = status
    r.ok = status < 400
    r.reason = reason
    if payload is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = payload
    return r


@pytest.fixture
def session():
    s = requests.Session()
    s.request = MagicMock()
    return s


def test_get_file_request(session, location):
    session.request.return_value = _resp(200, {"content": "e30=\n", "sha": "abc"})
    transport = GitHubContentsTransport("secret", api_url="https://gh.example/", session=session)

    remote = transport.get_file(location)

    assert remote.sha == "abc"
    assert remote.content == "e30=\n"
    method, url = session.request.call_args.args
    assert method == "GET"
    assert url == "https://gh.example/repos/acme/grafik/contents/data/grafik.json"
    assert session.request.call_args.kwargs["params"] == {"ref": "main"}
    assert session.headers["Authorization"] == "Bearer secret"


def test_put_file_payload_and_new_sha(session, location):
    session.request.return_value = _resp(200, {"content": {"sha": "new"}})
    transport = GitHubContentsTransport("secret", session=session)

    assert transport.put_file(location, "e30=", "old", "msg") == "new"
    assert session.request.call_args.args[0] == "PUT"
    assert session.request.call_args.kwargs["json"] == {
        "message": "msg", "content": "e30=", "sha": "old", "branch": "main",
    }


@pytest.mark.parametrize("status, payload, exc", [
    (409, {"message": "is at abc but expected def"}, ConflictError),
    (422, {"message": "sha does not match"}, ConflictError),
    (401, {"message": "Bad credentials"}, AuthenticationError),
    (403, None, AuthenticationError),
    (404, {"message": "Not Found"}, TransportError),
    (422, {"message": "Invalid request"}, TransportError),
])
def test_error_mapping(session, location, status, payload, exc):
    session.request.return_value = _resp(status, payload)
    transport = GitHubContentsTransport("secret", session=session)

    with pytest.raises(exc) as info:
        transport.put_file(location, "e30=", "old", "msg")
    assert info.value.status == status
    if payload:
        assert info.value.message == payload["message"]


def test_generic_errors_are_not_conflicts(session, location):
    session.request.return_value = _resp(500, {"message": "boom"})
    transport = GitHubContentsTransport("secret", session=session)
    with pytest.raises(TransportError) as info:
        transport.get_file(location)
    assert not isinstance(info.value, ConflictError)


def test_network_failure(session, location):
    session.request.side_effect = requests.ConnectionError("unreachable")
    transport = GitHubContentsTransport("secret", session=session)
    with pytest.raises(TransportError) as info:
        transport.get_file(location)
    assert info.value.status is None


def test_directory_path_is_rejected(session, location):
    session.request.return_value = _resp(200, [{"name": "a.json"}])
    transport = GitHubContentsTransport("secret", session=session)
    with pytest.raises(TransportError):
        transport.get_file(location)
