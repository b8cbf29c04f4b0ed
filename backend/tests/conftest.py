"""Shared test configuration, fixtures and pytest markers."""

import pytest

from fakes import FakeClassifier, FakeGenerator, fast_resilient_client
from services.inference_client import RemoteInference


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: exercises the FastAPI app through TestClient"
    )


@pytest.fixture
def fake_classifier():
    return FakeClassifier()


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def remote(fake_classifier, fake_generator):
    return RemoteInference(fake_classifier, fake_generator, fast_resilient_client())


@pytest.fixture
def offline_remote():
    return RemoteInference(None, None, fast_resilient_client())
