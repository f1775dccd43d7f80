from __future__ import annotations

import pytest

from travelmap import (
    ClusterExpanded,
    EntitySelected,
    LocatedEntity,
    ProximityClusterer,
    cluster,
    select_cluster,
)
from travelmap.model.base import Cluster


def test_select_singleton_selects_entity() -> None:
    c = LocatedEntity(id="C", position=(10.0, 10.0))
    result = select_cluster(Cluster(c.position, (c,)))
    assert isinstance(result, EntitySelected)
    assert result.kind == "selected"
    assert result.entity is c


def test_select_group_expands_without_selection() -> None:
    a = LocatedEntity(id="A", position=(0.0, 0.0))
    b = LocatedEntity(id="B", position=(0.0005, 0.0))
    group = Cluster(a.position, (a, b))
    result = select_cluster(group)
    assert isinstance(result, ClusterExpanded)
    assert result.kind == "expanded"
    assert result.members == (a, b)
    assert result.cluster is group
    assert not hasattr(result, "entity")


def test_select_scenario_end_to_end() -> None:
    a = LocatedEntity(id="A", position=(0.0, 0.0))
    b = LocatedEntity(id="B", position=(0.0005, 0.0))
    c = LocatedEntity(id="C", position=(10.0, 10.0))
    groups = cluster([a, b, c], 0.001)
    expanded = select_cluster(groups[0])
    selected = select_cluster(groups[1])
    assert isinstance(expanded, ClusterExpanded)
    assert [m.id for m in expanded.members] == ["A", "B"]
    assert isinstance(selected, EntitySelected)
    assert selected.entity.id == "C"


def test_selection_has_no_side_effects() -> None:
    a = LocatedEntity(id="A", position=(0.0, 0.0))
    group = Cluster(a.position, (a,))
    first = select_cluster(group)
    second = ProximityClusterer().select(group)
    assert first == second
    assert group.members == (a,)


@pytest.mark.parametrize(
    "count,expected", [(1, EntitySelected), (2, ClusterExpanded), (5, ClusterExpanded)]
)
def test_selection_variant_by_count(count: int, expected: type) -> None:
    members = tuple(LocatedEntity(id=str(i), position=(0.0, 0.0)) for i in range(count))
    assert isinstance(select_cluster(Cluster((0.0, 0.0), members)), expected)
