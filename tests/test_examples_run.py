from __future__ import annotations

import runpy
from pathlib import Path
from typing import Iterable, List

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


def _example_params(paths: Iterable[Path]) -> List[pytest.ParameterSet]:
    return [pytest.param(path, id=path.stem) for path in sorted(paths, key=lambda p: p.name)]


@pytest.mark.parametrize("example_path", _example_params(EXAMPLES_DIR.glob("*.py")))
def test_examples_run(example_path: Path, capsys) -> None:
    runpy.run_path(str(example_path), run_name="__main__")
    captured = capsys.readouterr()
    assert captured.out
