from wsgiref.util import setup_testing_defaults

import pytest

from geecache.demo import MOCK_DB, create_group, main, make_api_app
from geecache.group import get_group


def _call(app, path, query=""):
    environ = {}
    setup_testing_defaults(environ)
    environ["PATH_INFO"] = path
    environ["QUERY_STRING"] = query
    seen = {}

    def start_response(status, headers):
        seen["status"] = status
        seen["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return seen["status"], seen["headers"], body


def test_create_group_registers_scores():
    group = create_group()
    assert get_group("scores") is group
    assert str(group.get("Tom")) == "630"


def test_create_group_unknown_key_raises():
    group = create_group()
    with pytest.raises(LookupError, match="nobody does not exist"):
        group.get("nobody")


def test_api_returns_value():
    app = make_api_app(create_group())
    status, headers, body = _call(app, "/api", "key=Sam")
    assert status.startswith("200")
    assert headers["Content-Type"] == "application/octet-stream"
    assert body == MOCK_DB["Sam"].encode()


def test_api_missing_key_is_server_error():
    app = make_api_app(create_group())
    status, _, body = _call(app, "/api", "key=nobody")
    assert status.startswith("500")
    assert body == b"nobody does not exist\n"


def test_api_other_path_not_found():
    app = make_api_app(create_group())
    status, _, _ = _call(app, "/elsewhere", "key=Tom")
    assert status.startswith("404")


def test_main_rejects_unknown_port():
    with pytest.raises(SystemExit) as exc:
        main(["--port", "1234"])
    assert exc.value.code == 2