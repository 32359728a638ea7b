"""
Pytest configuration for diffcover tests.
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest


@pytest.fixture(scope="session")
def test_fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_diff(test_fixtures_dir: Path) -> Path:
    """Diff touching pkg/calc.go, pkg/util.go and docs/README.md."""
    return test_fixtures_dir / "sample.diff"


@pytest.fixture(scope="session")
def sample_profile(test_fixtures_dir: Path) -> Path:
    """Coverage profile with module-qualified paths for the sample diff."""
    return test_fixtures_dir / "sample.out"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory(prefix="diffcover_test_") as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def write_file(temp_dir: Path) -> Callable[..., Path]:
    """Write lines to a file in the temporary directory."""

    def _write(name: str, *lines: str) -> Path:
        path = temp_dir / name
        path.write_text("".join(line + "\n" for line in lines))
        return path

    return _write


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as end-to-end tests over fixture files"
    )


def pytest_collection_modifyitems(config, items):
    """Mark CLI and pipeline tests as integration tests."""
    for item in items:
        if "test_cli" in item.nodeid or "test_pipeline" in item.nodeid:
            item.add_marker(pytest.mark.integration)
