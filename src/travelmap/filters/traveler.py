"""Profile based filters for the travelers shown on the map.

Each criterion is a collection of accepted values; an empty collection
imposes no constraint.  Comparisons ignore case and surrounding whitespace.
Profile fields are read from :attr:`LocatedEntity.attrs`.  The stay duration
range is inclusive and compares against ``duration_of_stay`` in days;
travelers without a numeric duration fail an active range check.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from travelmap.model.base import EntityStatus, LocatedEntity
from travelmap.utils.errors import InvalidArgumentError

if TYPE_CHECKING:  # pragma: no cover
    from travelmap.config.schema import FilterSettings


def _norm(values: Iterable[str]) -> frozenset[str]:
    return frozenset(v.strip().lower() for v in values if v and v.strip())


def _stay_days(entity: LocatedEntity) -> float | None:
    raw = entity.attrs.get("duration_of_stay")
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _attr_values(entity: LocatedEntity, key: str) -> frozenset[str]:
    raw = entity.attrs.get(key)
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        return _norm([raw])
    if isinstance(raw, Iterable):
        return _norm(str(v) for v in raw)
    return _norm([str(raw)])


@dataclass(slots=True, frozen=True)
class FilterValues:
    """Accepted statuses, languages, nationalities, interests and stay range."""

    statuses: frozenset[EntityStatus] = frozenset()
    languages: frozenset[str] = frozenset()
    nationalities: frozenset[str] = frozenset()
    interests: frozenset[str] = frozenset()
    stay_duration: tuple[float, float] | None = None

    @classmethod
    def build(
        cls,
        *,
        statuses: Iterable[EntityStatus | str] = (),
        languages: Iterable[str] = (),
        nationalities: Iterable[str] = (),
        interests: Iterable[str] = (),
        stay_duration: tuple[float, float] | None = None,
    ) -> "FilterValues":
        if stay_duration is not None:
            low, high = float(stay_duration[0]), float(stay_duration[1])
            if not 0 <= low <= high:
                raise InvalidArgumentError(
                    f"stay duration must be [min, max] with 0 <= min <= max: {stay_duration!r}"
                )
            stay_duration = (low, high)
        return cls(
            statuses=frozenset(EntityStatus.parse(s) for s in statuses),
            languages=_norm(languages),
            nationalities=_norm(nationalities),
            interests=_norm(interests),
            stay_duration=stay_duration,
        )

    @classmethod
    def from_settings(cls, settings: "FilterSettings") -> "FilterValues":
        return cls.build(
            statuses=settings.statuses,
            languages=settings.languages,
            nationalities=settings.nationalities,
            interests=settings.interests,
            stay_duration=settings.stay_duration,
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.statuses
            or self.languages
            or self.nationalities
            or self.interests
            or self.stay_duration is not None
        )

    def matches(self, entity: LocatedEntity) -> bool:
        if self.statuses and entity.status not in self.statuses:
            return False
        if self.languages and not self.languages & _attr_values(entity, "languages"):
            return False
        if self.nationalities and not self.nationalities & _attr_values(entity, "nationality"):
            return False
        if self.interests and not self.interests & _attr_values(entity, "interests"):
            return False
        if self.stay_duration is not None:
            days = _stay_days(entity)
            low, high = self.stay_duration
            if days is None or not low <= days <= high:
                return False
        return True


def filter_entities(
    entities: Iterable[LocatedEntity], filters: FilterValues | None = None
) -> list[LocatedEntity]:
    """Return the entities accepted by ``filters`` in their original order."""

    if filters is None or filters.is_empty:
        return list(entities)
    return [e for e in entities if filters.matches(e)]
