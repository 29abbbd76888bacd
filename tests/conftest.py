"""Pytest fixtures for the kinship engine and API tests."""

import pytest

from family_fixtures import PEOPLE, RELATIONSHIPS, Family
from giapha.family.graph import FamilyGraph


@pytest.fixture
def family():
    """The reference three-generation family."""
    return Family(PEOPLE, RELATIONSHIPS)


@pytest.fixture
def graph():
    return FamilyGraph(PEOPLE, RELATIONSHIPS)
