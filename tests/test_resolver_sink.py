# tests/test_resolver_sink.py
import os
import socket
import stat

import pytest

from pingshell import resolver
from pingshell.cancel import CancellationToken
from pingshell.sink import OutputSink


@pytest.mark.parametrize("host", ["127.0.0.1", "8.8.8.8", "::1", "2001:db8::5"])
def test_ip_literals_are_valid_without_dns(monkeypatch, host):
    def no_dns(*args, **kwargs):
        raise AssertionError("DNS should not be consulted for literals")

    monkeypatch.setattr(resolver.socket, "getaddrinfo", no_dns)
    assert resolver.is_valid_host(host)


def test_resolvable_name(monkeypatch):
    monkeypatch.setattr(resolver.socket, "getaddrinfo",
                        lambda host, port: [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 0))])
    assert resolver.is_valid_host("example.com")
    assert resolver.resolve_address("example.com") == "93.184.216.34"


@pytest.mark.parametrize("exc", [socket.gaierror(-2, "Name or service not known"), OSError("no network"),
                                 UnicodeError("label too long")])
def test_resolution_errors_mean_invalid(monkeypatch, exc):
    def fail(host, port):
        raise exc

    monkeypatch.setattr(resolver.socket, "getaddrinfo", fail)
    assert resolver.is_valid_host("badhost.invalid") is False


def test_empty_host_is_invalid():
    assert resolver.is_valid_host("") is False


def test_sink_echoes_and_buffers():
    echoed = []
    sink = OutputSink(echo=echoed.append)
    sink.emit("one")
    sink.emit("")
    assert echoed == ["one", ""]
    assert sink.text() == "one\n\n"


def test_sink_write_replaces_whole_file(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("stale contents that are longer\n")
    sink = OutputSink()
    sink.emit("fresh")

    saved = sink.write_to(str(target))

    assert saved == os.path.abspath(str(target))
    assert target.read_text() == "fresh\n"
    assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]


def test_sink_write_failure_leaves_nothing(tmp_path, monkeypatch):
    sink = OutputSink()
    sink.emit("x")

    def broken_replace(src, dst):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(OSError):
        sink.write_to(str(tmp_path / "out.txt"))
    assert list(tmp_path.iterdir()) == []


def test_token_wait_and_reset():
    token = CancellationToken()
    assert token.wait(0) is False
    token.cancel()
    assert token.cancelled
    assert token.wait(5) is True
    token.reset()
    assert not token.cancelled


def test_sink_new_file_gets_umask_mode(tmp_path):
    previous = os.umask(0o022)
    try:
        sink = OutputSink()
        sink.emit("x")
        sink.write_to(str(tmp_path / "new.txt"))
    finally:
        os.umask(previous)
    assert stat.S_IMODE((tmp_path / "new.txt").stat().st_mode) == 0o644


def test_sink_keeps_existing_file_mode(tmp_path):
    target = tmp_path / "shared.txt"
    target.write_text("old\n")
    os.chmod(target, 0o640)
    sink = OutputSink()
    sink.emit("new")
    sink.write_to(str(target))
    assert stat.S_IMODE(target.stat().st_mode) == 0o640
    assert target.read_text() == "new\n"
