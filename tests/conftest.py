from __future__ import annotations

import time
from pathlib import Path

import pytest

from apihub.config import Options

TEMPLATE = '<select id="x">${baseURLs}</select>'


def write(path: Path, content: str = "{}") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def wait_for(predicate, timeout: float = 5.0, interval: float = 0.05) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def doc_root(tmp_path: Path) -> Path:
    """A document root with index.tpl and api/foo.json."""
    root = tmp_path / "root"
    write(root / "index.tpl", TEMPLATE)
    write(root / "api" / "foo.json")
    return root


@pytest.fixture
def opts(doc_root: Path) -> Options:
    return Options(port=8080, domain="example.com", dir=str(doc_root), log_file=str(doc_root.parent / "doc.log"))
