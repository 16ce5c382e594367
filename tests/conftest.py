"""Shared pytest fixtures for optwire tests."""

import pytest

from optwire.container import Container
from tests.sample_container import SampleContainer


@pytest.fixture()
def container() -> Container:
    """Bare container without providers."""
    return Container()


@pytest.fixture()
def sample_container() -> SampleContainer:
    """Container with the sample service and factory providers."""
    return SampleContainer()
