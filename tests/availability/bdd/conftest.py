"""Shared BDD fixtures for the Availability domain."""

import pytest


@pytest.fixture()
def flavor_records():
    """Flavor variants assembled by Given steps."""
    return []
