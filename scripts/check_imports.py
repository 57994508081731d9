#!/usr/bin/env python3
"""Check the layering of the multisig_account package.

Layers form a strict chain, innermost first:

    domain -> config -> application -> infrastructure -> bootstrap

A module may import from its own layer and from any layer inside it,
never from a layer outside it. Imports under ``if TYPE_CHECKING:`` count.

Usage:
    python scripts/check_imports.py [package_directory]

Exit codes:
    0: No violations found
    1: Violations found
"""
import ast
import sys
from pathlib import Path
from typing import NamedTuple

PACKAGE = "multisig_account"

LAYERS = ("domain", "config", "application", "infrastructure", "bootstrap")

LAYER_HIERARCHY: dict[str, int] = {layer: rank for rank, layer in enumerate(LAYERS)}

ALLOWED_IMPORTS: dict[str, set[str]] = {
    layer: set(LAYERS[:rank]) for rank, layer in enumerate(LAYERS)
}


class Violation(NamedTuple):
    path: str
    line: int
    message: str


def get_import_module(node: ast.Import | ast.ImportFrom) -> str | None:
    """Absolute module named by an import, or None for relative imports."""
    if isinstance(node, ast.ImportFrom):
        return node.module if node.level == 0 else None
    return node.names[0].name if node.names else None


def _layer_of(module: str) -> str | None:
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE:
        return None
    return parts[1] if parts[1] in LAYER_HIERARCHY else None


def check_file_imports(py_file: Path, package_dir: Path) -> list[Violation]:
    """Violations in one file; files outside a layer or unparseable yield none."""
    try:
        layer = py_file.relative_to(package_dir).parts[0]
    except (ValueError, IndexError):
        return []
    if layer not in LAYER_HIERARCHY:
        return []

    try:
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    except (SyntaxError, UnicodeDecodeError) as e:
        print(f"Warning: Could not parse {py_file}: {e}", file=sys.stderr)
        return []

    allowed = ALLOWED_IMPORTS[layer] | {layer}
    violations = []
    for node in ast.walk(tree):
        if not isinstance(node, (ast.Import, ast.ImportFrom)):
            continue
        module = get_import_module(node)
        target = _layer_of(module) if module else None
        if target is not None and target not in allowed:
            violations.append(
                Violation(
                    str(py_file), node.lineno, f"{layer} layer cannot import from {target}"
                )
            )
    return violations


def check_import_boundaries(package_dir: Path) -> list[Violation]:
    if not package_dir.exists():
        print(f"Error: Package directory '{package_dir}' does not exist", file=sys.stderr)
        return []
    violations = []
    for py_file in sorted(package_dir.rglob("*.py")):
        violations.extend(check_file_imports(py_file, package_dir))
    return violations


def format_violations(violations: list[Violation]) -> str:
    if not violations:
        return ""
    lines = ["Import boundary violations found:", ""]
    lines.extend(f"  {v.path}:{v.line}: {v.message}" for v in sorted(violations))
    lines += ["", f"Total: {len(violations)} violation(s)"]
    return "\n".join(lines)


def main() -> int:
    if len(sys.argv) > 1:
        package_dir = Path(sys.argv[1])
    else:
        package_dir = Path(__file__).parent.parent / PACKAGE

    violations = check_import_boundaries(package_dir)
    if violations:
        print(format_violations(violations))
        return 1
    print("No import boundary violations found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
