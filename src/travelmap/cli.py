"""Typer-based command line interface for clustering traveler files.

``run`` reads travelers, applies the configured filters, clusters them and
writes marker summaries.  ``select`` resolves a click on one cluster and
prints the result as JSON.

Exit codes
----------
0 success
3 I/O error (missing reader/writer, malformed input, filesystem issues)
4 configuration error (invalid YAML, environment or command line overrides)
5 clustering error (non-finite coordinates, bad cluster index)
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError

from .clustering.proximity import ProximityClusterer, select_cluster
from .config import ConfigModel, load_config
from .filters import FilterValues, filter_entities
from .io import read_entities, write_summaries
from .model.base import Cluster
from .render.summary import selection_to_dict, summarize_clusters
from .utils.errors import ConfigError, InvalidArgumentError, IOFormatError
from .utils.logging import configure_logging, get_logger

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

log = get_logger(__name__)

app = typer.Typer(
    name="travelmap",
    help="Cluster travelers for map display. Use 'travelmap run' to cluster a file.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _apply_overrides(
    cfg: ConfigModel,
    *,
    radius: float | None,
    metric: str | None,
    index: str | None,
    statuses: list[str] | None,
    languages: list[str] | None,
) -> ConfigModel:
    """Return a copy of ``cfg`` with CLI overrides applied and re-validated.

    Raises ``pydantic.ValidationError`` when an override is invalid.
    """

    new_cfg = cfg.model_copy(deep=True)
    if radius is not None:
        new_cfg.clustering.radius = radius
    if metric is not None:
        new_cfg.clustering.metric = metric  # type: ignore[assignment]
    if index is not None:
        new_cfg.clustering.index = index  # type: ignore[assignment]
    if statuses:
        new_cfg.filters.statuses = [s.strip().lower() for s in statuses]  # type: ignore[misc]
    if languages:
        new_cfg.filters.languages = languages
    return ConfigModel.model_validate(new_cfg.model_dump())


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


def _first_error_line(exc: Exception) -> str:
    """Return a one-line message for a config failure."""

    if isinstance(exc.__cause__, ValidationError):
        exc = exc.__cause__
    if isinstance(exc, ValidationError):
        errors = exc.errors()
        if errors:
            loc = ".".join(str(part) for part in errors[0]["loc"])
            return f"invalid configuration: {loc}: {errors[0]['msg']}"
    return str(exc).splitlines()[0]


def _load(config_path: Path | None, **overrides: object) -> ConfigModel:
    try:
        cfg = load_config(config_path)
        return _apply_overrides(cfg, **overrides)  # type: ignore[arg-type]
    except (ConfigError, ValidationError, OSError) as exc:
        _safe_exit(4, _first_error_line(exc))


def _cluster_file(in_path: Path, cfg: ConfigModel) -> list[Cluster]:
    """Read, filter and cluster ``in_path`` translating errors to exit codes."""

    try:
        entities = read_entities(in_path)
    except (IOFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    log.info("read %d travelers from %s", len(entities), in_path)

    try:
        filters = FilterValues.from_settings(cfg.filters)
        entities = filter_entities(entities, filters)
        log.info("%d travelers left after filtering", len(entities))
        clusterer = ProximityClusterer.from_config(cfg)
        with Timing() as t_cluster:
            clusters = clusterer.cluster(entities)
    except InvalidArgumentError as exc:
        _safe_exit(5, str(exc))
    log.info("formed %d clusters in %.1f ms", len(clusters), t_cluster.ms)
    return clusters


@app.callback()
def main() -> None:
    """Entry point for the travelmap command group."""
    pass


@app.command()
def run(  # noqa: PLR0913
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Traveler file (.json or .csv)"
    ),
    out_path: Path = typer.Option(..., "--out", help="Summary file (.json)"),  # noqa: B008
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    radius: Optional[float] = typer.Option(  # noqa: B008
        None, "--radius", help="Clustering radius in coordinate units"
    ),
    metric: Optional[str] = typer.Option(  # noqa: B008
        None, "--metric", help="Distance metric [euclidean|haversine]"
    ),
    index: Optional[str] = typer.Option(  # noqa: B008
        None, "--index", help="Candidate lookup [linear|grid]"
    ),
    statuses: Optional[list[str]] = typer.Option(  # noqa: B008
        None, "--status", help="Keep only travelers with this status (repeatable)"
    ),
    languages: Optional[list[str]] = typer.Option(  # noqa: B008
        None, "--language", help="Keep only travelers speaking this language (repeatable)"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> dict[str, str]:
    """Cluster the travelers in ``in_path`` and write summaries to ``out_path``."""

    configure_logging(verbose)
    cfg = _load(
        config_path,
        radius=radius,
        metric=metric,
        index=index,
        statuses=statuses,
        languages=languages,
    )
    clusters = _cluster_file(in_path, cfg)

    payload = {
        "radius": cfg.clustering.radius,
        "metric": cfg.clustering.metric,
        "clusters": [s.to_dict() for s in summarize_clusters(clusters)],
    }
    try:
        write_summaries(out_path, payload, indent=cfg.output.indent)
    except (IOFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    log.info("wrote %s", out_path)
    return {"out": str(out_path)}


@app.command()
def select(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Traveler file (.json or .csv)"
    ),
    cluster_index: int = typer.Option(  # noqa: B008
        ..., "--cluster", help="Index of the clicked cluster as listed by 'run'"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    radius: Optional[float] = typer.Option(  # noqa: B008
        None, "--radius", help="Clustering radius in coordinate units"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Print what clicking cluster ``--cluster`` selects."""

    configure_logging(verbose)
    cfg = _load(
        config_path,
        radius=radius,
        metric=None,
        index=None,
        statuses=None,
        languages=None,
    )
    clusters = _cluster_file(in_path, cfg)
    if not 0 <= cluster_index < len(clusters):
        _safe_exit(5, f"cluster index {cluster_index} out of range (0..{len(clusters) - 1})")

    result = select_cluster(clusters[cluster_index])
    typer.echo(json.dumps(selection_to_dict(result), ensure_ascii=False, indent=2))
