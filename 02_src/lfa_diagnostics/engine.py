"""Entry point: one diagnostics run from (graph, inventory) to a simulation result."""

import logging
from functools import lru_cache
from typing import Any, Iterable, List, Mapping, Sequence

from .config import EngineConfig
from .errors import InvalidInput
from .findings import SimulationResult
from .inventory import InventoryCatalog, load_default_catalog
from .phases import (
    AnalysisPhase,
    DiagnosticsReporterPhase,
    GraphModelPhase,
    InventoryResolverPhase,
    ScoringPhase,
)
from .phases.reporting import Clock
from .pipeline import PipelinePhase, PipelineRunner

logger = logging.getLogger(__name__)


def build_default_phases() -> List[PipelinePhase]:
    return [
        GraphModelPhase(),
        InventoryResolverPhase(),
        AnalysisPhase(),
        ScoringPhase(),
        DiagnosticsReporterPhase(),
    ]


@lru_cache(maxsize=None)
def _default_runner() -> PipelineRunner:
    # Phases are stateless; one compiled runner serves every run.
    runner = PipelineRunner(phases=build_default_phases())
    logger.debug("Built default diagnostics pipeline: %s", " -> ".join(runner.phase_names))
    return runner


def run_simulation(
    project_id: str,
    nodes: Sequence[Mapping[str, Any]],
    edges: Sequence[Mapping[str, Any]],
    catalog: InventoryCatalog | Iterable[Mapping[str, Any]] | None = None,
    config: EngineConfig | None = None,
    scale: float | None = None,
    clock: Clock | None = None,
) -> SimulationResult:
    """Analyze a framework graph and return a fresh, immutable report.

    Graph defects never raise; they are reported as errors inside the result.
    Only argument-shape problems raise ``InvalidInput``.
    """
    if not isinstance(project_id, str):
        raise InvalidInput(f"project_id must be a string, got {type(project_id).__name__}")
    if scale is not None and (isinstance(scale, bool) or not isinstance(scale, (int, float))):
        raise InvalidInput(f"scale must be a number, got {scale!r}")
    if config is not None and not isinstance(config, EngineConfig):
        raise InvalidInput("config must be an EngineConfig")

    initial_context = {
        "project_id": project_id,
        "nodes": nodes,
        "edges": edges,
        "catalog": _as_catalog(catalog),
        "config": config or EngineConfig(),
        "scale": scale,
        "clock": clock,
    }
    final_context = _default_runner().run(initial_context)
    result: SimulationResult = final_context["simulation_result"]
    logger.info(
        "Simulation for project %s: status=%s score=%d errors=%d",
        project_id,
        result.status,
        result.overall_score,
        len(result.errors),
    )
    return result


def _as_catalog(catalog: Any) -> InventoryCatalog:
    if catalog is None:
        return load_default_catalog()
    if isinstance(catalog, InventoryCatalog):
        return catalog
    return InventoryCatalog.from_records(catalog)
