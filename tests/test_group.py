import pytest

from geecache.byteview import ByteView
from geecache.getter import GetterFunc
from geecache.group import Group, get_group, new_group
from geecache.peers import Request, Response

DB = {"Tom": "630", "Jack": "589", "Sam": "567"}


def _counting_getter(counts):
    def load(key):
        if key in DB:
            counts[key] = counts.get(key, 0) + 1
            return DB[key].encode()
        raise LookupError(f"{key} not exist")

    return GetterFunc(load)


class _FakePeer:
    def __init__(self, value=b"", error=None):
        self.value = value
        self.error = error
        self.requests = []

    def get(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return Response(value=self.value)


class _FakePicker:
    def __init__(self, peer):
        self.peer = peer

    def pick_peer(self, key):
        return self.peer


def test_get_loads_once_then_hits_cache():
    counts = {}
    gee = new_group("scores", 2 << 10, _counting_getter(counts))
    for key, value in DB.items():
        assert str(gee.get(key)) == value
        assert str(gee.get(key)) == value
        assert counts[key] == 1


def test_unknown_key_raises():
    gee = new_group("scores", 2 << 10, _counting_getter({}))
    with pytest.raises(LookupError, match="unknown not exist"):
        gee.get("unknown")


def test_get_group_returns_registered_group():
    gee = new_group("group-lookup", 1024, _counting_getter({}))
    assert get_group("group-lookup") is gee
    assert get_group("group-that-was-never-made") is None


def test_nil_getter_rejected():
    with pytest.raises(ValueError):
        new_group("no-getter", 1024, None)


def test_plain_callable_accepted_as_getter():
    gee = Group("plain", 1024, lambda key: key.upper().encode())
    assert gee.get("abc") == ByteView(b"ABC")


def test_register_peer_picker_twice_raises():
    gee = Group("twice", 1024, _counting_getter({}))
    gee.register_peer_picker(_FakePicker(None))
    with pytest.raises(RuntimeError):
        gee.register_peer_picker(_FakePicker(None))


def test_peer_value_is_used_and_not_cached_locally():
    counts = {}
    peer = _FakePeer(value=b"remote")
    gee = Group("with-peer", 1024, _counting_getter(counts))
    gee.register_peer_picker(_FakePicker(peer))

    assert gee.get("Tom") == ByteView(b"remote")
    assert gee.get("Tom") == ByteView(b"remote")
    assert peer.requests == [Request("with-peer", "Tom"), Request("with-peer", "Tom")]
    assert counts == {}


def test_peer_failure_falls_back_to_source_and_caches():
    counts = {}
    peer = _FakePeer(error=ConnectionError("down"))
    gee = Group("failing-peer", 1024, _counting_getter(counts))
    gee.register_peer_picker(_FakePicker(peer))

    assert str(gee.get("Jack")) == "589"
    assert str(gee.get("Jack")) == "589"
    assert counts == {"Jack": 1}
    assert len(peer.requests) == 1


def test_no_peer_for_key_uses_source():
    counts = {}
    gee = Group("local-owner", 1024, _counting_getter(counts))
    gee.register_peer_picker(_FakePicker(None))
    assert str(gee.get("Sam")) == "567"
    assert counts == {"Sam": 1}


def test_source_bytes_are_copied():
    data = bytearray(b"abc")
    gee = Group("copy", 1024, lambda key: data)
    view = gee.get("k")
    data[0] = ord("z")
    assert view == ByteView(b"abc")