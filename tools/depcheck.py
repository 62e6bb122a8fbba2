"""Import policy check for the inner layers of ``qrdine``.

The domain layer may only import the standard library and other domain
modules. The application layer may additionally use pydantic for its DTOs
and prometheus_client for lifecycle metrics, but never the web framework,
the database, the cache or any outbound HTTP client.
"""

from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "qrdine"

_OUTER_LAYERS = {
    "fastapi",
    "starlette",
    "sqlalchemy",
    "alembic",
    "redis",
    "httpx",
    "requests",
    "jose",
    "bcrypt",
    "qrcode",
    "PIL",
    "opentelemetry",
    "qrdine.api",
    "qrdine.infrastructure",
    "qrdine.client",
}

LAYER_RULES: dict[str, frozenset[str]] = {
    "domain": frozenset(
        _OUTER_LAYERS | {"pydantic", "prometheus_client", "qrdine.application"}
    ),
    "application": frozenset(_OUTER_LAYERS),
}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str, forbidden_modules: frozenset[str]) -> bool:
    return any(
        module == forbidden or module.startswith(f"{forbidden}.")
        for forbidden in forbidden_modules
    )


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def _scan_file(file_path: Path, forbidden_modules: frozenset[str]) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    return [
        Violation(file_path=file_path, line=line, module=module)
        for line, module in _imported_modules(tree)
        if _matches_forbidden(module, forbidden_modules)
    ]


def find_violations(paths: Sequence[Path], layer: str = "domain") -> list[Violation]:
    forbidden_modules = LAYER_RULES[layer]
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, forbidden_modules))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dependency policy check for src/qrdine domain and application imports."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to the layer's package directory.",
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_RULES),
        action="append",
        default=[],
        help="Layer rules to apply (repeatable). Defaults to every layer.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    layers = args.layer or sorted(LAYER_RULES)

    violations: list[Violation] = []
    for layer in layers:
        scan_paths = [Path(item) for item in args.path] if args.path else [PACKAGE_ROOT / layer]
        violations.extend(find_violations(scan_paths, layer=layer))

    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
