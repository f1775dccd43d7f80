from __future__ import annotations

import pytest

from travelmap.model.base import LocatedEntity


@pytest.fixture
def travelers() -> list[LocatedEntity]:
    """Three travelers a few hundred metres apart in lower Manhattan."""

    return [
        LocatedEntity(
            id="1",
            position=(40.712776, -74.005974),
            status="available",  # type: ignore[arg-type]
            attrs={
                "name": "John Doe",
                "nationality": "USA",
                "languages": ["English", "Spanish"],
                "interests": ["Hiking", "Street food"],
            },
        ),
        LocatedEntity(
            id="2",
            position=(40.714776, -74.003974),
            status="busy",  # type: ignore[arg-type]
            attrs={
                "name": "Jane Smith",
                "nationality": "UK",
                "languages": ["English", "French"],
                "interests": ["Photography"],
            },
        ),
        LocatedEntity(
            id="3",
            position=(40.715776, -74.006974),
            status="available",  # type: ignore[arg-type]
            attrs={
                "name": "Carlos Rodriguez",
                "nationality": "Spain",
                "languages": ["Spanish", "English", "Portuguese"],
                "interests": ["Hiking"],
            },
        ),
    ]
