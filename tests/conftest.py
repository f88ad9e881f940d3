import sys
from pathlib import Path

import pytest

# Ensure repository root is on the import path for local package imports during tests.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def books_dir(tmp_path: Path) -> Path:
    """Three small books: two about cats, one about ships."""
    d = tmp_path / "books"
    d.mkdir()
    (d / "cat.txt").write_text("THE cat SAT on THE MAT")
    (d / "hat.txt").write_text("A cat sat on a hat")
    (d / "ship.txt").write_text("The ship sailed over the sea, and the sea was calm.")
    return d
