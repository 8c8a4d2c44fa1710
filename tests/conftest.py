"""
Pytest configuration and shared fixtures for fast-constraints tests.
"""

import pytest
from faker import Faker

from fast_constraints.core.validator import set_validator

fake = Faker()


@pytest.fixture
def first_name():
    """A realistic first name that no blocklist contains."""
    return fake.unique.first_name()


@pytest.fixture
def sample_author():
    return {
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "email": fake.email(),
    }


@pytest.fixture(autouse=True)
def fresh_validator():
    """Each test starts with a new process-wide validator."""
    set_validator(None)
    yield
    set_validator(None)
