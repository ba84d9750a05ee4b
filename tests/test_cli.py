import socket
import sys

import pytest

from fileserve.cli import ArgumentError, main, parse_args
from fileserve.server import DEFAULT_ADDRESS, DEFAULT_PORT


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_parse_args_reads_all_options(tmp_path):
    options = parse_args(
        ["--root_path", str(tmp_path), "--address", "0.0.0.0", "--port", "9000"]
    )
    assert options.root_path == str(tmp_path)
    assert options.address == "0.0.0.0"
    assert options.port == 9000


def test_parse_args_defaults(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "prog")])
    options = parse_args([])
    assert options.root_path == str(tmp_path)
    assert options.address == DEFAULT_ADDRESS == "127.0.0.1"
    assert options.port == DEFAULT_PORT == 8000


def test_parse_args_ignores_unknown_arguments():
    options = parse_args(["stray", "--verbose", "--port", "8123", "extra"])
    assert options.port == 8123
    assert options.address == DEFAULT_ADDRESS


def test_parse_args_option_value_is_consumed():
    options = parse_args(["--address", "--port", "--port", "7001"])
    assert options.address == "--port"
    assert options.port == 7001


@pytest.mark.parametrize("argv", [["--port"], ["--address"], ["--root_path"], ["--port", "1", "--address"]])
def test_parse_args_missing_value(argv):
    with pytest.raises(ArgumentError, match='after "--root_path", "--address" and "--port"'):
        parse_args(argv)


@pytest.mark.parametrize("value", ["abc", "-5", "80a", ""])
def test_parse_args_port_must_be_number(value):
    with pytest.raises(ArgumentError, match='It must be number after "--port"'):
        parse_args(["--port", value])


def test_main_reports_argument_error(capsys):
    assert main(["--port", "x"]) == 0
    assert capsys.readouterr().out.strip() == 'It must be number after "--port"'


def test_main_reports_missing_directory(capsys, tmp_path):
    missing = tmp_path / "missing"
    assert main(["--root_path", str(missing), "--port", "0"]) == 0
    assert capsys.readouterr().out.strip() == "Directory don't exists"


def test_main_reports_binding_error(capsys, tmp_path):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        assert main(["--root_path", str(tmp_path), "--port", str(port)]) == 0
    assert capsys.readouterr().out.strip() == "Failed to bind socket"


def test_main_reports_out_of_range_port(capsys, tmp_path):
    assert main(["--root_path", str(tmp_path), "--port", "70000"]) == 0
    assert capsys.readouterr().out.strip() == "Failed to bind socket"


def test_main_serves_until_input(monkeypatch, capsys, tmp_path):
    (tmp_path / "a.txt").write_text("hello")
    port = _free_port()
    replies = []

    class _Stdin:
        def readline(self):
            with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
                request = b"show_files ."
                client.sendall(request + bytes(1024 - len(request)))
                data = b""
                while True:
                    chunk = client.recv(4096)
                    if not chunk:
                        break
                    data += chunk
            replies.append(data)
            return "\n"

    monkeypatch.setattr(sys, "stdin", _Stdin())
    assert main(["--root_path", str(tmp_path), "--port", str(port)]) == 0

    assert len(replies) == 1
    reply = replies[0]
    assert len(reply) == 1024
    assert reply[0] == 1
    assert reply[1:].rstrip(b"\0") == b"file a.txt "
    assert capsys.readouterr().out == ""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.settimeout(1)
        with pytest.raises(OSError):
            probe.connect(("127.0.0.1", port))