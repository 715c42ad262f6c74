"""Demo: run a cache node, optionally with a user-facing API server."""

from __future__ import annotations

import argparse
import logging
import socketserver
import threading
from http import HTTPStatus
from urllib.parse import parse_qs, urlsplit
from wsgiref.simple_server import WSGIServer, make_server

from geecache.getter import GetterFunc
from geecache.group import Group, new_group
from geecache.server import CacheServer

logger = logging.getLogger(__name__)

MOCK_DB = {"Tom": "630", "Jack": "589", "Sam": "567"}

API_ADDR = "http://localhost:9999"
ADDR_MAP = {
    8001: "http://localhost:8001",
    8002: "http://localhost:8002",
    8003: "http://localhost:8003",
}


class _ThreadingWSGIServer(socketserver.ThreadingMixIn, WSGIServer):
    daemon_threads = True


def create_group() -> Group:
    """Create the "scores" group backed by the mock database."""

    def load(key: str) -> bytes:
        logger.info("[SlowDB] search key: %s", key)
        if key in MOCK_DB:
            return MOCK_DB[key].encode()
        raise LookupError(f"{key} does not exist")

    return new_group("scores", 2 << 10, GetterFunc(load))


def make_api_app(group: Group):
    """Return a WSGI app answering ``/api?key=...`` from ``group``."""

    def app(environ, start_response):
        if environ.get("PATH_INFO", "") != "/api":
            body = b"404 page not found\n"
            start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
            return [body]
        key = parse_qs(environ.get("QUERY_STRING", "")).get("key", [""])[0]
        try:
            view = group.get(key)
        except Exception as exc:
            status = HTTPStatus.INTERNAL_SERVER_ERROR
            start_response(
                f"{int(status)} {status.phrase}",
                [("Content-Type", "text/plain; charset=utf-8")],
            )
            return [(str(exc) + "\n").encode("utf-8")]
        start_response("200 OK", [("Content-Type", "application/octet-stream")])
        return [view.byte_slice()]

    return app


def _serve(addr: str, app) -> None:
    parts = urlsplit(addr)
    with make_server(parts.hostname or "", parts.port or 80, app,
                     server_class=_ThreadingWSGIServer) as httpd:
        httpd.serve_forever()


def start_cache_server(addr: str, addrs: list[str], group: Group) -> None:
    """Serve this node's cache at ``addr`` with ``addrs`` as the peer set."""
    cache_server = CacheServer(addr)
    cache_server.add_peers(*addrs)
    group.register_peer_picker(cache_server)
    logger.info("geecache is running at %s", addr)
    _serve(addr, cache_server)


def start_api_server(api_addr: str, group: Group) -> None:
    """Serve the user-facing API at ``api_addr``."""
    logger.info("frontend server is running at %s", api_addr)
    _serve(api_addr, make_api_app(group))


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run a geecache node.")
    parser.add_argument("-port", "--port", type=int, default=8001, choices=sorted(ADDR_MAP),
                        help="cache server port")
    parser.add_argument("-api", "--api", action="store_true", help="also start the API server")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    group = create_group()
    if args.api:
        threading.Thread(target=start_api_server, args=(API_ADDR, group), daemon=True).start()
    start_cache_server(ADDR_MAP[args.port], list(ADDR_MAP.values()), group)


if __name__ == "__main__":
    main()