import pytest
import tempfile
import shutil
from datetime import datetime, timezone
from pathlib import Path


@pytest.fixture
def temp_workspace():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_project(temp_workspace):
    """Create a small project: one source file, a dotenv and a dependency."""
    root = temp_workspace / "sample_project"
    root.mkdir()

    (root / "src").mkdir()
    (root / "node_modules").mkdir()

    (root / "src" / "a.js").write_text("x" * 49 + "\n")
    (root / ".env").write_text("SECRET=42\n")
    (root / "node_modules" / "pkg.js").write_text("y" * 49 + "\n")

    return root


@pytest.fixture
def larger_project(temp_workspace):
    """Create a project with nested directories, hidden dirs and mixed files."""
    root = temp_workspace / "larger_project"
    root.mkdir()

    for directory in ["src/utils", "tests", "docs", ".git", ".github/workflows", "dist", "logs"]:
        (root / directory).mkdir(parents=True)

    (root / "README.md").write_text("# Larger Project\n")
    (root / "LICENSE").write_text("MIT\n")
    (root / "setup.py").write_text("from setuptools import setup\n\nsetup(name='sample')\n")
    (root / "src" / "__init__.py").write_text("")
    (root / "src" / "main.py").write_text("def main():\n    print('Hello, World!')\n")
    (root / "src" / "utils" / "helpers.py").write_text("def helper():\n    return 42\n")
    (root / "src" / "app.log").write_text("log line\n")
    (root / "tests" / "test_main.py").write_text("def test_main():\n    assert True\n")
    (root / "docs" / "guide.md").write_text("# Guide\n")
    (root / ".git" / "config").write_text("[core]\n    repositoryformatversion = 0\n")
    (root / ".github" / "workflows" / "ci.yml").write_text("on: push\n")
    (root / "dist" / "bundle.js").write_text("bundle();\n")
    (root / "logs" / "today.txt").write_text("nothing\n")
    (root / "image.png").write_bytes(b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR')

    return root


@pytest.fixture
def fixed_clock():
    """Clock returning a constant moment, for byte-identical documents."""
    moment = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    return lambda: moment
