"""Shared test fixtures for LineDiff tests."""

import pytest

from linediff import DiffOptions


@pytest.fixture
def default_options():
    """Options as the tool starts with them."""
    return DiffOptions()


@pytest.fixture
def plain_options():
    """Options with line numbers turned off."""
    return DiffOptions(show_line_numbers=False)


@pytest.fixture
def ten_lines():
    """Ten distinct lines l1..l10."""
    return "\n".join(f"l{n}" for n in range(1, 11))


@pytest.fixture
def sample_old():
    return """function hello() {
  console.log("Hello World");
  return true;
}

const name = "John";
const age = 25;"""


@pytest.fixture
def sample_new():
    return """function hello() {
  console.log("Hello Universe");
  console.log("Welcome!");
  return true;
}

const name = "Jane";
const age = 30;
const city = "New York";"""


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name, text, encoding="utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path
    return _write
