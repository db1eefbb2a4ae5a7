"""CLI parser and startup behaviour tests."""

from __future__ import annotations

import os
from pathlib import Path

from apihub import cli
from apihub.config import EXIT_CONFIG, EXIT_LOG, EXIT_OK, EXIT_RUN


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args(["--dir", "docs"])
    assert args.port == 80
    assert args.domain == "apihub.idcos.net"
    assert args.log == "doc-server.log"
    assert args.verbose is False


def test_invalid_port_exits_with_config_code(doc_root: Path, tmp_path: Path, capsys) -> None:
    code = cli.main(["--port", "70000", "--dir", str(doc_root), "--log", str(tmp_path / "l.log")])
    assert code == EXIT_CONFIG
    assert "invalid port" in capsys.readouterr().err


def test_missing_dir_exits_with_config_code(tmp_path: Path) -> None:
    code = cli.main(["--dir", str(tmp_path / "nope"), "--log", str(tmp_path / "l.log")])
    assert code == EXIT_CONFIG


def test_unwritable_log_exits_with_log_code(doc_root: Path, tmp_path: Path) -> None:
    code = cli.main(["--dir", str(doc_root), "--log", str(tmp_path / "no" / "such" / "l.log")])
    assert code == EXIT_LOG


def test_missing_template_exits_before_serving(doc_root: Path, tmp_path: Path, monkeypatch) -> None:
    (doc_root / "index.tpl").unlink()

    def fail(*a, **kw):
        raise AssertionError("server must not start")

    monkeypatch.setattr(cli, "make_server", fail)
    log = tmp_path / "l.log"
    code = cli.main(["--dir", str(doc_root), "--log", str(log)])
    assert code == EXIT_RUN
    assert "index.tpl" in log.read_text(encoding="utf-8")


class FakeServer:
    def __init__(self, opts_dir: str):
        self.dir = opts_dir
        self.closed = False

    def serve_forever(self):
        raise KeyboardInterrupt

    def server_close(self):
        self.closed = True


def test_run_generates_then_serves_and_shuts_down(doc_root: Path, tmp_path: Path, monkeypatch) -> None:
    servers = []

    def fake_make_server(root, port, host=""):
        assert (Path(root) / "index.html").exists()
        servers.append(FakeServer(root))
        return servers[-1]

    monkeypatch.setattr(cli, "make_server", fake_make_server)
    log = tmp_path / "l.log"
    code = cli.main(["--port", "8080", "--domain", "example.com", "--dir", str(doc_root), "--log", str(log)])

    assert code == EXIT_OK
    assert servers[0].closed
    text = log.read_text(encoding="utf-8")
    assert "Start doc service(port=8080" in text
    assert "Find docs:" in text


def test_watch_failure_degrades_but_serves(doc_root: Path, tmp_path: Path, monkeypatch) -> None:
    from apihub.config import WatchError

    def broken_start(self):
        raise WatchError("cannot watch")

    monkeypatch.setattr(cli.DirectoryWatcher, "start", broken_start)
    monkeypatch.setattr(cli, "make_server", lambda root, port, host="": FakeServer(root))
    log = tmp_path / "l.log"

    assert cli.main(["--dir", str(doc_root), "--log", str(log)]) == EXIT_OK
    assert "live updates disabled" in log.read_text(encoding="utf-8")


def test_bind_failure_exits_with_run_code(doc_root: Path, tmp_path: Path, monkeypatch) -> None:
    def cannot_bind(root, port, host=""):
        raise OSError("address in use")

    monkeypatch.setattr(cli, "make_server", cannot_bind)
    assert cli.main(["--dir", str(doc_root), "--log", str(tmp_path / "l.log")]) == EXIT_RUN


def test_missing_dir_flag_is_a_config_error(tmp_path: Path, capsys) -> None:
    assert cli.main(["--log", str(tmp_path / "l.log")]) == EXIT_CONFIG
    assert "--dir" in capsys.readouterr().err


def test_unexpected_startup_error_exits_with_run_code(doc_root: Path, tmp_path: Path, monkeypatch, capsys) -> None:
    def explode(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(cli.PageGenerator, "generate", explode)
    monkeypatch.setattr(cli, "make_server", lambda root, port, host="": FakeServer(root))
    log = tmp_path / "l.log"

    assert cli.main(["--dir", str(doc_root), "--log", str(log)]) == EXIT_RUN
    assert "disk on fire" in capsys.readouterr().err
    assert "Initial generation failed" in log.read_text(encoding="utf-8")


def test_non_utf8_inputs_start_normally(doc_root: Path, tmp_path: Path, monkeypatch) -> None:
    (doc_root / "index.tpl").write_bytes(b"<p>caf\xe9</p>${baseURLs}")
    with open(os.path.join(os.fsencode(str(doc_root / "api")), b"na\xefve.json"), "wb") as f:
        f.write(b"{}")
    monkeypatch.setattr(cli, "make_server", lambda root, port, host="": FakeServer(root))

    assert cli.main(["--dir", str(doc_root), "--log", str(tmp_path / "l.log")]) == EXIT_OK
    assert b"na%EFve.json" in (doc_root / "index.html").read_bytes()
