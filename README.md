# geecache

A small distributed in-memory cache. Each node keeps a byte-bounded LRU
cache, spreads keys across peers by consistent hashing, and collapses
concurrent loads of the same key into a single call to the data source.
It uses only the standard library.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Using it as a library

```python
from geecache.getter import GetterFunc
from geecache.group import new_group, get_group

db = {"Tom": b"630", "Jack": b"589", "Sam": b"567"}

def load(key):
    try:
        return db[key]
    except KeyError:
        raise KeyError(f"{key} does not exist") from None

scores = new_group("scores", 2 << 10, GetterFunc(load))

view = scores.get("Tom")   # loaded from the source, then cached
print(str(view))           # "630"
scores.get("Tom")          # served from the local cache
assert get_group("scores") is scores
```

`new_group(name, cache_bytes, getter)` creates a `Group` and registers it
under `name`; `get_group(name)` returns it, or `None`. The getter may be any
object with a `get(key)` method returning bytes (`GetterFunc` wraps a plain
function); a plain callable is also accepted. Passing `None` raises
`ValueError`.

`Group.get(key)` returns a `ByteView`. It first looks in the group's local
`Cache`. On a miss, if a `PeerPicker` was attached with
`register_peer_picker` (which may be called only once; a second call raises
`RuntimeError`), it asks the peer that owns the key; if there is no such peer
or the peer fails, it falls back to the getter. Values loaded from the getter
are stored in the local cache; values fetched from peers are not. Exceptions
raised by the getter propagate out of `Group.get`.

### Building blocks

- `geecache.byteview.ByteView` — immutable view of cached bytes
  (`size()`, `byte_slice()`, `str()`); `clone_bytes()` copies bytes.
- `geecache.lru.LRUCache(max_bytes, on_evicted)` — LRU cache bounded by the
  total size of keys plus values; `get` returns `None` on a miss, and
  `on_evicted(key, value)` is called for each evicted entry. Values must
  provide `size()`.
- `geecache.cache.Cache(cache_bytes)` — thread-safe wrapper around
  `LRUCache` holding `ByteView` values.
- `geecache.consistenthash.NodeMap(replicas, hasher)` — consistent-hash ring
  with virtual nodes (`add_nodes`, `del_node`, `get_node`); CRC-32 when
  `hasher` is `None`. `get_node` returns `None` on an empty ring.
- `geecache.singleflight.Batch` — `call(key, fn)` runs `fn` once for
  concurrent callers of the same key and shares its result or exception;
  after `close()` further calls raise `RuntimeError`.
- `geecache.peers` — the `Request` and `Response` messages and the
  `PeerPicker` and `PeerGetter` protocols.

### Serving peers over HTTP

`geecache.server.CacheServer` is a WSGI application that answers
`/_geecache/<group>/<key>` with the raw value bytes
(`application/octet-stream`); an unknown group gives 404, a path without a
key gives 400, and a load error gives 500. It is also a `PeerPicker`:
`add_peers(*urls)` and `del_peer(url)` manage the ring, and `pick_peer(key)`
returns an `HTTPGetter` for the owning node, or `None` when this node owns
the key.

```python
from wsgiref.simple_server import make_server
from geecache.server import CacheServer

server = CacheServer("http://localhost:8001")
server.add_peers("http://localhost:8001", "http://localhost:8002", "http://localhost:8003")
scores.register_peer_picker(server)
make_server("localhost", 8001, server).serve_forever()
```

`CacheServer.handle(method, path)` returns `(status, content_type, body)`
without going through WSGI.

## Demo

`geecache-demo` runs one of three cache nodes on ports 8001–8003 over a small
built-in "scores" table (Tom, Jack, Sam), optionally with a front-end API
server on port 9999:

```
geecache-demo --port 8001
geecache-demo --port 8002
geecache-demo --port 8003 --api
```

Then query the API server at `http://localhost:9999/api?key=Tom`.

## Limits

Everything is kept in memory: there is no persistence, no expiry and no
invalidation of cached values. Peers exchange plain value bytes over HTTP
with no authentication. The demo's node addresses are fixed to
`localhost` ports 8001–8003 and 9999.