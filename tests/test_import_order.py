"""Every module must import cleanly when it is the first one loaded."""

from __future__ import annotations

import os
import subprocess
import sys

import pytest

MODULES = [
    "prosecheck.utils.ranges",
    "prosecheck.document.base",
    "prosecheck.document.decorations",
    "prosecheck.document.blocks",
    "prosecheck.state.dirty",
    "prosecheck.state.registry",
    "prosecheck.state.reducer",
    "prosecheck.service.base",
    "prosecheck.report",
]


@pytest.mark.parametrize("module", MODULES)
def test_fresh_interpreter_import(module: str) -> None:
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(p for p in sys.path if p)}
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )
    assert result.returncode == 0, result.stderr
