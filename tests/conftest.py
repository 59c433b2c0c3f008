from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Small project: two sources, one vendored file and a non-source file."""
    write(tmp_path / "src" / "main.js", "const a = 1;\n// note\nconst b = 2;\n")
    write(tmp_path / "src" / "types.ts", "interface A {\n  x: number;\n}\n")
    write(tmp_path / "node_modules" / "dep" / "index.js", "foo();\n// vendored\nbar();\n")
    write(tmp_path / "README.md", "# readme\n")
    return tmp_path
