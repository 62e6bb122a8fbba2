from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT_PATH), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_depcheck_fails_on_forbidden_domain_import(tmp_path: Path) -> None:
    domain_dir = tmp_path / "domain"
    domain_dir.mkdir(parents=True, exist_ok=True)

    violating_file = domain_dir / "order.py"
    violating_file.write_text("import sqlalchemy\nfrom pydantic import BaseModel\n", "utf-8")

    result = _run("--layer", "domain", "--path", str(domain_dir))

    assert result.returncode != 0
    assert f"{violating_file}:1 -> sqlalchemy" in result.stdout
    assert f"{violating_file}:2 -> pydantic" in result.stdout


def test_application_layer_may_use_pydantic_but_not_http_clients(tmp_path: Path) -> None:
    allowed = tmp_path / "dto.py"
    allowed.write_text("from pydantic import BaseModel\nfrom .ports import Thing\n", "utf-8")
    forbidden = tmp_path / "checkout.py"
    forbidden.write_text("import httpx\nfrom qrdine.infrastructure.db import session\n", "utf-8")

    ok = _run("--layer", "application", "--path", str(allowed))
    failed = _run("--layer", "application", "--path", str(forbidden))

    assert ok.returncode == 0
    assert "depcheck passed" in ok.stdout
    assert failed.returncode != 0
    assert "-> httpx" in failed.stdout
    assert "-> qrdine.infrastructure.db" in failed.stdout


def test_source_tree_respects_layering() -> None:
    result = _run()

    assert result.returncode == 0, result.stdout
