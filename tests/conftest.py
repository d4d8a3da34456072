"""pytest configuration and shared fixtures."""

import pytest

from j_path import Container, ValueContainer, build_default_context, build_default_navigator


class CountingContainer(Container):
    """Container that counts how often its value is read."""

    def __init__(self, value=None):
        self.value = value
        self.reads = 0

    def get_value(self):
        self.reads += 1
        return self.value

    def set_value(self, value):
        self.value = value


@pytest.fixture
def ctx():
    """Default pointer context."""
    return build_default_context()


@pytest.fixture
def navigator():
    """Default path navigator."""
    return build_default_navigator()


@pytest.fixture
def sample_data():
    """Document mixing plain data and containers."""
    return {
        "title": "report",
        "user": ValueContainer({
            "name": "Alice",
            "roles": ["admin", "dev"],
        }),
        "items": [
            {"id": 1, "price": 10},
            {"id": 2, "price": 20},
        ],
    }


@pytest.fixture
def counting_container():
    """Factory fixture for ``CountingContainer``."""
    return CountingContainer
