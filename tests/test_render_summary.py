from __future__ import annotations

import json

import pytest

from travelmap import cluster, select_cluster
from travelmap.model.base import EntityStatus, LocatedEntity
from travelmap.render import marker_color, selection_to_dict, summarize_clusters


def test_summaries_for_groups_and_singletons(travelers: list[LocatedEntity]) -> None:
    lonely = LocatedEntity(
        id="4", position=(41.0, -73.0), status="offline", attrs={"name": "Ana"}  # type: ignore[arg-type]
    )
    clusters = cluster([*travelers, lonely], 0.004)
    summaries = summarize_clusters(clusters)
    assert [s.kind for s in summaries] == ["group", "singleton"]

    group, single = summaries
    assert group.index == 0
    assert (group.lat, group.lng) == travelers[0].position
    assert group.count == 3
    assert group.label == "3 Travelers Nearby"
    assert group.member_ids == ("1", "2", "3")
    assert group.status is None and group.marker_color is None

    assert single.index == 1
    assert single.label == "Ana"
    assert single.status is EntityStatus.OFFLINE
    assert single.marker_color == "gray"


def test_singleton_label_falls_back_to_id() -> None:
    entity = LocatedEntity(id="anon", position=(0.0, 0.0))
    (summary,) = summarize_clusters(cluster([entity], 1.0))
    assert summary.label == "anon"
    assert summary.marker_color == "green"


@pytest.mark.parametrize(
    "status,color",
    [(EntityStatus.AVAILABLE, "green"), (EntityStatus.BUSY, "amber"), (EntityStatus.OFFLINE, "gray")],
)
def test_marker_colors(status: EntityStatus, color: str) -> None:
    assert marker_color(status) == color


def test_summary_to_dict_is_json_ready(travelers: list[LocatedEntity]) -> None:
    data = [s.to_dict() for s in summarize_clusters(cluster(travelers, 0.0001))]
    encoded = json.loads(json.dumps(data))
    assert encoded[1]["status"] == "busy"
    assert encoded[1]["marker_color"] == "amber"
    assert encoded[0]["member_ids"] == ["1"]


def test_selection_to_dict(travelers: list[LocatedEntity]) -> None:
    (group,) = cluster(travelers, 0.01)
    expanded = selection_to_dict(select_cluster(group))
    assert expanded["kind"] == "expanded"
    assert expanded["count"] == 3
    assert [m["name"] for m in expanded["members"]] == [
        "John Doe",
        "Jane Smith",
        "Carlos Rodriguez",
    ]

    singles = cluster(travelers, 0.0001)
    selected = selection_to_dict(select_cluster(singles[2]))
    assert selected == {
        "kind": "selected",
        "entity": {
            "id": "3",
            "position": [40.715776, -74.006974],
            "status": "available",
            "name": "Carlos Rodriguez",
            "nationality": "Spain",
            "languages": ["Spanish", "English", "Portuguese"],
            "interests": ["Hiking"],
        },
    }
