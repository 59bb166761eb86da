# tests/conftest.py
import pytest

from placement.contracts.relations import PropertyRelation, PropertyRelationKind
from placement.core.board import Board
from placement.core.config import Settings
from tests.helpers.catalog import make_resource


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def board(settings) -> Board:
    """Two nodes, red and blue, with no entities yet."""
    b = Board(settings=settings)
    assert b.add_resource(make_resource("node1", "red"))
    assert b.add_resource(make_resource("node2", "blue"))
    return b


@pytest.fixture
def color_relation() -> PropertyRelation:
    return PropertyRelation(
        id="color",
        kind=PropertyRelationKind.AFFINITY,
        entity_property="red",
        resource_property="red",
    )
