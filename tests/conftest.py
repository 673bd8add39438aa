"""
conftest.py
-----------
Shared pytest fixtures for post loader tests.
"""
import pytest
from pathlib import Path


@pytest.fixture
def posts_dir():
    """Path to the sample post tree."""
    return Path(__file__).parent / "fixtures" / "posts"


@pytest.fixture
def make_blob():
    """Build a post blob from front matter lines and a body."""

    def _make(*meta_lines, body="Hello"):
        return "---\n" + "".join(f"{line}\n" for line in meta_lines) + "---\n" + body

    return _make


@pytest.fixture
def minimal_blob(make_blob):
    """Blob with only the required keys."""
    return make_blob('title: "X"', 'date: "2022-06-21T22:42:09+02:00"')
