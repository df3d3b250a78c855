"""Load analyzer: stakeholder assignment load against bandwidth."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config import CRITICAL, WARNING, EngineConfig
from ..findings import Finding
from ..graph_model import (
    DELIVERS,
    INTERVENTION,
    MONITORS,
    REQUIRES,
    STAKEHOLDER,
    FrameworkGraph,
    GraphNode,
    StakeholderAttributes,
)
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)

ASSIGNMENT_TYPES = (DELIVERS, REQUIRES, MONITORS)


@dataclass(frozen=True)
class StakeholderLoad:
    node_id: str
    label: str
    current_load: float
    bandwidth: float
    # None when the ratio is unbounded (zero bandwidth carrying load).
    percent: Optional[float]


@dataclass
class LoadReport:
    loads: Dict[str, StakeholderLoad]
    stakeholder_load: Dict[str, Optional[float]]
    findings: List[Finding]


class LoadAnalyzer:
    def __init__(self, config: EngineConfig) -> None:
        self._config = config

    def analyze(self, graph: FrameworkGraph) -> LoadReport:
        loads: Dict[str, StakeholderLoad] = {}
        label_map: Dict[str, Optional[float]] = {}
        findings: List[Finding] = []

        for node in graph.nodes_of(STAKEHOLDER):
            current_load = self._assigned_load(graph, node)
            bandwidth = self._bandwidth(node)
            percent = self._percent(current_load, bandwidth)
            loads[node.id] = StakeholderLoad(
                node_id=node.id,
                label=node.label,
                current_load=current_load,
                bandwidth=bandwidth,
                percent=percent,
            )
            label_map[_unique_key(label_map, node)] = percent

            finding = self._finding_for(node, current_load, bandwidth, percent)
            if finding is not None:
                findings.append(finding)

        logger.debug("Load pass: stakeholders=%d findings=%d", len(loads), len(findings))
        return LoadReport(loads=loads, stakeholder_load=label_map, findings=findings)

    @staticmethod
    def _assigned_load(graph: FrameworkGraph, node: GraphNode) -> float:
        total: float = 0
        for edge in graph.incident_edges(node.id):
            if edge.interaction_type not in ASSIGNMENT_TYPES:
                continue
            if edge.source == edge.target:
                continue
            if graph.neighbour(edge, node.id).type != INTERVENTION:
                continue
            total += edge.weight if edge.weight is not None else 1
        return total

    def _bandwidth(self, node: GraphNode) -> float:
        attributes = node.attributes
        if isinstance(attributes, StakeholderAttributes) and attributes.bandwidth is not None:
            return attributes.bandwidth
        return self._config.default_bandwidth

    @staticmethod
    def _percent(current_load: float, bandwidth: float) -> Optional[float]:
        if bandwidth <= 0:
            return None if current_load > 0 else 0.0
        return round(current_load / bandwidth * 100, 2)

    def _finding_for(
        self, node: GraphNode, current_load: float, bandwidth: float, percent: Optional[float]
    ) -> Finding | None:
        if percent is None:
            severity, shown = CRITICAL, "an unlimited share"
        elif percent <= self._config.load_warning_percent:
            return None
        else:
            severity = CRITICAL if percent > self._config.load_critical_percent else WARNING
            shown = f"{_format_number(percent)}%"
        return Finding(
            rule="bandwidth_exceeded",
            severity=severity,
            node_id=node.id,
            title="Bandwidth Exceeded",
            message=(
                f'"{node.label}" carries {_format_number(current_load)} assignments against a bandwidth '
                f"of {_format_number(bandwidth)} ({shown} of capacity)."
            ),
            fix_suggestion="Remove low-priority interventions or add a supporting stakeholder such as a volunteer.",
        )


def _unique_key(label_map: Dict[str, Optional[float]], node: GraphNode) -> str:
    """Label first, then "Label (id)", then numbered variants; never reuses a key."""
    candidate = node.label
    if candidate not in label_map:
        return candidate
    candidate = f"{node.label} ({node.id})"
    suffix = 2
    while candidate in label_map:
        candidate = f"{node.label} ({node.id}) #{suffix}"
        suffix += 1
    return candidate


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


class LoadAnalyzerPhase(PipelinePhase):
    phase_name = "load"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        report = LoadAnalyzer(context["config"]).analyze(context["graph"])
        return {
            "load_findings": report.findings,
            "stakeholder_loads": report.loads,
            "stakeholder_load": report.stakeholder_load,
        }
