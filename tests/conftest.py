"""Test configuration and fixtures."""

import pytest

from dockerscope import WorkspaceConfig
from tests.helpers import create_image_tar


@pytest.fixture
def work_dir(tmp_path):
    """Directory holding working copies created during a test."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def config(work_dir):
    """Workspace config redirected into the test's temp directory."""
    return WorkspaceConfig(working_directory=work_dir, lock_timeout=5)


@pytest.fixture
def two_layer_tar(tmp_path):
    """Archive with layers A and B, B created last, and no repositories file."""
    return create_image_tar(
        tmp_path / "image.tar",
        layers={"A": "2020-01-01T00:00:00Z", "B": "2020-06-01T00:00:00Z"},
    )


def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")
