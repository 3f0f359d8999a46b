import threading
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests

from gobeat.errors import EmptyURLError, NetworkError, ResultPostError
from gobeat.poster import ResultPoster, format_result, post_result
from gobeat.settings import GobeatSettings, resolve_url

SETTINGS = GobeatSettings(target_url="", user="alex", game="ping pong")


class ResultServer:
    """Local HTTP server recording POST bodies and replying with a fixed status."""

    def __init__(self) -> None:
        self.status = 200
        self.bodies: list[str] = []
        outer = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self) -> None:  # noqa: N802
                length = int(self.headers.get("Content-Length", 0))
                outer.bodies.append(self.rfile.read(length).decode("utf-8"))
                self.send_response(outer.status)
                self.send_header("Content-Length", "0")
                self.end_headers()

            def log_message(self, format: str, *args: Any) -> None:
                pass

        self.httpd = HTTPServer(("127.0.0.1", 0), Handler)
        host, port = self.httpd.server_address[:2]
        self.url = f"http://{host}:{port}"

    def start(self) -> None:
        threading.Thread(target=self.httpd.serve_forever, daemon=True).start()

    def stop(self) -> None:
        self.httpd.shutdown()
        self.httpd.server_close()


@pytest.fixture
def result_server(monkeypatch: pytest.MonkeyPatch) -> Generator[ResultServer, None, None]:
    """Start a local result server; bypass any configured proxies."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    server = ResultServer()
    server.start()
    yield server
    server.stop()


def test_format_result():
    """Body follows the '<user> beat <opponent> at <game> with score <score>' format."""
    assert format_result(SETTINGS, "oleg", "9001-0") == "alex beat oleg at ping pong with score 9001-0"


def test_post_result_sends_exact_body(result_server: ResultServer):
    """The server receives exactly the formatted result."""
    post_result(SETTINGS, result_server.url, "oleg", "9001-0")

    assert result_server.bodies == ["alex beat oleg at ping pong with score 9001-0"]


def test_post_result_accepts_parsed_url(result_server: ResultServer):
    """A URL from resolve_url can be passed directly."""
    destination = resolve_url(SETTINGS.model_copy(update={"target_url": result_server.url}))

    post_result(SETTINGS, destination, "oleg", "9001-0")

    assert len(result_server.bodies) == 1


def test_post_result_created_is_success(result_server: ResultServer):
    """201 Created counts as success."""
    result_server.status = 201
    post_result(SETTINGS, result_server.url, "oleg", "21-3")
    assert len(result_server.bodies) == 1


@pytest.mark.parametrize("status", [204, 404, 500])
def test_post_result_other_status_fails(result_server: ResultServer, status: int):
    """Any status other than 200/201 is an error naming the code."""
    result_server.status = status

    with pytest.raises(ResultPostError) as exc_info:
        post_result(SETTINGS, result_server.url, "oleg", "9001-0")

    assert exc_info.value.code == status
    assert str(status) in str(exc_info.value)
    assert len(result_server.bodies) == 1


@pytest.mark.parametrize("destination", ["", None])
def test_post_result_empty_destination_makes_no_request(destination: str | None):
    """An empty destination fails before any network I/O."""
    with patch("gobeat.poster.requests.post") as mock_post:
        with pytest.raises(EmptyURLError, match="empty URL"):
            post_result(SETTINGS, destination, "oleg", "9001-0")

    mock_post.assert_not_called()


def test_post_result_empty_parsed_url_makes_no_request():
    """A parsed but empty target is rejected too."""
    destination = resolve_url(SETTINGS)
    with patch("gobeat.poster.requests.post") as mock_post:
        with pytest.raises(EmptyURLError):
            post_result(SETTINGS, destination, "oleg", "9001-0")

    mock_post.assert_not_called()


def test_post_result_network_error():
    """Transport failures are wrapped in NetworkError."""
    error = requests.ConnectionError("connection refused")
    with patch("gobeat.poster.requests.post", side_effect=error):
        with pytest.raises(NetworkError) as exc_info:
            post_result(SETTINGS, "http://127.0.0.1:9", "oleg", "9001-0")

    assert exc_info.value.original_error is error
    assert exc_info.value.code == 0


def test_post_result_schemeless_url_is_network_error():
    """A target without a scheme fails at request time, not at parse time."""
    with pytest.raises(NetworkError):
        post_result(SETTINGS, "foo.gov", "oleg", "9001-0")


def test_result_poster_single_request_with_timeout():
    """Exactly one request is made, with the configured timeout."""
    mock_post = MagicMock(return_value=MagicMock(status_code=200, text=""))
    with patch("gobeat.poster.requests.post", mock_post):
        ResultPoster(SETTINGS, timeout=5.0).post("http://scores.test/r", "oleg", "1-0")

    mock_post.assert_called_once_with(
        "http://scores.test/r",
        data=b"alex beat oleg at ping pong with score 1-0",
        timeout=5.0,
    )


def test_result_poster_no_timeout_by_default():
    """Without a timeout the transport defaults apply."""
    mock_post = MagicMock(return_value=MagicMock(status_code=201, text=""))
    with patch("gobeat.poster.requests.post", mock_post):
        post_result(SETTINGS, "http://scores.test/r", "oleg", "1-0")

    assert mock_post.call_args.kwargs["timeout"] is None
