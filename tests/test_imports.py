# tests/test_imports.py
"""
Smoke test: ensure every Python module under `src/` imports successfully.

- Project *root* goes on sys.path so `import src.*` resolves cleanly.
- Modules are discovered with pathlib and converted to `src.*` names.
- pygame runs headless so no display/audio is required.
"""

from __future__ import annotations

import os
import sys
import importlib
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"


def _discover_src_modules() -> list[str]:
    modules: set[str] = set()
    for py in SRC.rglob("*.py"):
        if "__pycache__" in py.parts:
            continue
        parts = list(py.relative_to(SRC).with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts = parts[:-1]
        if parts:
            modules.add(".".join(["src", *parts]))
    return ["src", *sorted(modules)]


def test_import_all_modules_headless() -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

    if str(ROOT) not in sys.path:
        sys.path.insert(0, str(ROOT))

    failures: list[tuple[str, Exception]] = []
    for mod_name in _discover_src_modules():
        try:
            importlib.import_module(mod_name)
        except Exception as e:  # we want full visibility on any import failure
            failures.append((mod_name, e))

    if failures:
        msgs = "\n".join(f"{m}: {type(e).__name__}({e})" for m, e in failures)
        raise AssertionError(f"Import failures:\n{msgs}")
