"""Shared BDD fixtures for the Catalogue domain."""

import pytest


@pytest.fixture()
def items():
    """Menu item ids created by Given steps, keyed by name."""
    return {}
