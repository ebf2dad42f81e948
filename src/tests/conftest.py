import os
import sys
from pathlib import Path

import pytest

# Ensure Qt can run in headless environments during tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# This file lives at <project_root>/src/tests/conftest.py
PROJECT_ROOT = Path(__file__).resolve().parents[2]
proj = str(PROJECT_ROOT)
if proj not in sys.path:
    sys.path.insert(0, proj)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A small source tree with annotations in a few files."""
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "app.py").write_text(
        "import os\n# TODO: read config\nx = 1  # FIXME: magic number\n", encoding="utf-8"
    )
    (tmp_path / "pkg" / "util.js").write_text("// todo lowercase\nconst y = 2;\n", encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("// TODO: not ours\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("Nothing to see\n", encoding="utf-8")
    (tmp_path / "logo.bin").write_bytes(b"TODO:\x00\x01\x02")
    return tmp_path
