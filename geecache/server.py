"""HTTP endpoint serving cached values to peers, and the client used to reach them."""

from __future__ import annotations

import logging
import threading
import urllib.error
import urllib.request
from http import HTTPStatus
from typing import Optional
from urllib.parse import quote

from geecache.consistenthash import NodeID, NodeMap
from geecache.group import get_group
from geecache.peers import Request, Response

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "/_geecache/"
DEFAULT_REPLICAS = 50

_OCTET_STREAM = "application/octet-stream"
_TEXT_PLAIN = "text/plain; charset=utf-8"


class HTTPGetter:
    """Fetches values from one remote node over HTTP."""

    def __init__(self, remote_url: str) -> None:
        self.remote_url = remote_url

    def get(self, request: Request) -> Response:
        """Request the group's key from the remote node."""
        url = (
            self.remote_url.rstrip("/")
            + "/"
            + quote(request.group, safe="")
            + "/"
            + quote(request.key, safe="")
        )
        try:
            with urllib.request.urlopen(url) as resp:
                if resp.status != HTTPStatus.OK:
                    raise ConnectionError(f"server returned: {resp.status} {resp.reason}")
                body = resp.read()
        except urllib.error.HTTPError as exc:
            raise ConnectionError(f"server returned: {exc.code} {exc.reason}") from exc
        return Response(value=body)


class CacheServer:
    """Serves ``<base_path><group>/<key>`` and picks peers by consistent hashing."""

    def __init__(self, addr: str) -> None:
        self.self_url = addr
        self.base_path = DEFAULT_BASE_PATH
        self.peers = NodeMap(DEFAULT_REPLICAS, None)
        self.getters: dict[NodeID, HTTPGetter] = {}
        self._lock = threading.RLock()

    def handle(self, method: str, path: str) -> tuple[int, str, bytes]:
        """Answer a request for ``path``; return (status, content type, body)."""
        if not path.startswith(self.base_path):
            raise ValueError(f"CacheServer serving unexpected path: {path}")
        logger.info("[Server %s] %s : %s", self.self_url, method, path)
        parts = path[len(self.base_path):].split("/", 1)
        if len(parts) < 2:
            return _error(HTTPStatus.BAD_REQUEST, "bad request")
        group_name, key = parts

        group = get_group(group_name)
        if group is None:
            return _error(HTTPStatus.NOT_FOUND, f"no such group: {group_name}")
        try:
            value = group.get(key)
        except Exception as exc:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return HTTPStatus.OK, _OCTET_STREAM, value.byte_slice()

    def __call__(self, environ, start_response):
        raw_path = environ.get("PATH_INFO", "")
        path = raw_path.encode("latin-1").decode("utf-8", errors="replace")
        status, content_type, body = self.handle(environ.get("REQUEST_METHOD", "GET"), path)
        start_response(
            f"{int(status)} {HTTPStatus(status).phrase}",
            [("Content-Type", content_type), ("Content-Length", str(len(body)))],
        )
        return [body]

    def add_peers(self, *peers: NodeID) -> None:
        """Register peer nodes by their base URLs."""
        with self._lock:
            for peer in peers:
                self.peers.add_nodes(peer)
                self.getters[peer] = HTTPGetter(peer.rstrip("/") + self.base_path)

    def del_peer(self, peer: NodeID) -> None:
        """Forget a previously registered peer."""
        with self._lock:
            if peer in self.getters:
                self.peers.del_node(peer)
                del self.getters[peer]

    def pick_peer(self, key: str) -> Optional[HTTPGetter]:
        """Return the getter of the node owning ``key``, or None if it is this node."""
        with self._lock:
            node = self.peers.get_node(key)
            # Never pick ourselves, or a request would loop back here.
            if node is None or node == self.self_url:
                return None
            logger.info("[Server %s] Pick peer %s", self.self_url, node)
            return self.getters.get(node)


def _error(status: HTTPStatus, message: str) -> tuple[int, str, bytes]:
    return status, _TEXT_PLAIN, (message + "\n").encode("utf-8")