"""
Shared pytest fixtures and configuration for the upload relay test suite.

This module provides:
- Hypothesis configuration for property-based testing
- A Flask app and test client bound to a temporary upload directory
- Mock and real storage repositories
- A sample PDF payload
"""

from unittest.mock import Mock

import pytest
from hypothesis import HealthCheck, Phase, settings

from upload_relay.app_factory import create_app
from upload_relay.config import RelayConfig
from upload_relay.infrastructure import LocalFileStorageRepository

from tests.fixtures.upload_helpers import make_pdf_bytes

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def upload_dir(tmp_path):
    """Provide a fresh upload directory path."""
    return tmp_path / "uploads"


@pytest.fixture
def relay_config(upload_dir) -> RelayConfig:
    """Provide a relay configuration pointing at the temporary directory."""
    return RelayConfig(upload_dir=upload_dir)


@pytest.fixture
def flask_app(relay_config):
    """Create Flask app for testing."""
    app = create_app(relay_config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(flask_app):
    """Create test client."""
    return flask_app.test_client()


@pytest.fixture
def sample_pdf() -> bytes:
    """Provide a 2 KB PDF payload."""
    return make_pdf_bytes(2048)


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest.fixture
def storage_repo(tmp_path):
    """Create a repository instance using a pytest-managed temporary directory."""
    return LocalFileStorageRepository(base_path=str(tmp_path / "store"))


@pytest.fixture
def mock_storage_repository():
    """
    Provide a mock storage repository for unit testing.

    Returns a Mock object with all IFileStorageRepository interface methods.
    """
    mock = Mock()
    mock.save_new.return_value = 2048
    mock.get.return_value = None
    mock.exists.return_value = False
    mock.delete.return_value = True
    mock.list_names.return_value = []
    mock.purge_staging.return_value = 0
    return mock


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real filesystem and HTTP stack)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
