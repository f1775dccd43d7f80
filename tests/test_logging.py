from __future__ import annotations

import logging

import pytest

from travelmap import cluster
from travelmap.model.base import LocatedEntity
from travelmap.utils.logging import configure_logging, get_logger


def test_get_logger_namespacing() -> None:
    assert get_logger().name == "travelmap"
    assert get_logger("travelmap.cli").name == "travelmap.cli"
    assert get_logger("extra").name == "travelmap.extra"


def test_configure_logging_is_idempotent() -> None:
    root = configure_logging(verbose=True)
    count = len(root.handlers)
    configure_logging(verbose=False)
    assert len(root.handlers) == count
    assert root.level == logging.WARNING


def test_cluster_emits_debug_record(caplog: pytest.LogCaptureFixture) -> None:
    entities = [LocatedEntity(id="a", position=(0.0, 0.0))]
    with caplog.at_level(logging.DEBUG, logger="travelmap"):
        cluster(entities, 1.0)
    assert "clustered 1 entities into 1 clusters" in caplog.text
