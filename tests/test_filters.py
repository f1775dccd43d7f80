from __future__ import annotations

import pytest

from travelmap.config import load_config
from travelmap.filters import FilterValues, filter_entities
from travelmap.model.base import EntityStatus, LocatedEntity
from travelmap.utils.errors import InvalidArgumentError


def _ids(entities: list[LocatedEntity]) -> list[str]:
    return [e.id for e in entities]


def test_empty_filters_keep_everything(travelers: list[LocatedEntity]) -> None:
    assert filter_entities(travelers) == travelers
    assert filter_entities(travelers, FilterValues()) == travelers
    assert FilterValues().is_empty


def test_status_filter(travelers: list[LocatedEntity]) -> None:
    filters = FilterValues.build(statuses=["AVAILABLE"])
    assert filters.statuses == frozenset({EntityStatus.AVAILABLE})
    assert _ids(filter_entities(travelers, filters)) == ["1", "3"]


def test_language_filter_is_case_insensitive(travelers: list[LocatedEntity]) -> None:
    filters = FilterValues.build(languages=[" french "])
    assert _ids(filter_entities(travelers, filters)) == ["2"]


def test_language_filter_matches_any(travelers: list[LocatedEntity]) -> None:
    filters = FilterValues.build(languages=["Portuguese", "French"])
    assert _ids(filter_entities(travelers, filters)) == ["2", "3"]


def test_nationality_and_interest_combined(travelers: list[LocatedEntity]) -> None:
    filters = FilterValues.build(nationalities=["usa", "spain"], interests=["hiking"])
    assert _ids(filter_entities(travelers, filters)) == ["1", "3"]
    filters = FilterValues.build(nationalities=["uk"], interests=["hiking"])
    assert filter_entities(travelers, filters) == []


def test_missing_profile_fields_do_not_match() -> None:
    bare = LocatedEntity(id="x", position=(0.0, 0.0))
    assert filter_entities([bare], FilterValues.build(languages=["English"])) == []
    assert filter_entities([bare], FilterValues.build(statuses=["available"])) == [bare]


def test_scalar_language_attribute() -> None:
    entity = LocatedEntity(id="x", position=(0.0, 0.0), attrs={"languages": "German"})
    assert filter_entities([entity], FilterValues.build(languages=["german"])) == [entity]


def test_unknown_status_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        FilterValues.build(statuses=["asleep"])


def test_from_settings() -> None:
    cfg = load_config()
    cfg.filters.statuses = ["busy"]
    filters = FilterValues.from_settings(cfg.filters)
    assert filters.statuses == frozenset({EntityStatus.BUSY})
    assert filters.languages == frozenset()


def _staying(days: object) -> LocatedEntity:
    attrs = {} if days is None else {"duration_of_stay": days}
    return LocatedEntity(id=f"stay-{days}", position=(0.0, 0.0), attrs=attrs)


def test_stay_duration_range_is_inclusive() -> None:
    entities = [_staying(d) for d in (0, 3, 7, 14, 15)]
    filters = FilterValues.build(stay_duration=(3, 14))
    assert _ids(filter_entities(entities, filters)) == ["stay-3", "stay-7", "stay-14"]
    assert not filters.is_empty


@pytest.mark.parametrize("days", [None, "soon", True, float("nan")])
def test_stay_duration_without_usable_value_is_excluded(days: object) -> None:
    entity = _staying(days)
    assert filter_entities([entity], FilterValues.build(stay_duration=(0, 365))) == []
    assert filter_entities([entity], FilterValues()) == [entity]


def test_stay_duration_accepts_numeric_strings() -> None:
    entity = _staying("5")
    assert filter_entities([entity], FilterValues.build(stay_duration=(1, 7))) == [entity]


@pytest.mark.parametrize("bounds", [(5, 1), (-1, 3)])
def test_invalid_stay_duration_rejected(bounds: tuple[float, float]) -> None:
    with pytest.raises(InvalidArgumentError):
        FilterValues.build(stay_duration=bounds)


def test_from_settings_passes_stay_duration() -> None:
    cfg = load_config(env={})
    cfg.filters.stay_duration = (2.0, 10.0)
    assert FilterValues.from_settings(cfg.filters).stay_duration == (2.0, 10.0)
