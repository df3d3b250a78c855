"""Diagnostics reporter: stable error ids, node annotations and the final result."""

from datetime import datetime, timezone
from hashlib import sha1
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..config import CRITICAL, WARNING
from ..errors import InvalidInput
from ..findings import (
    NODE_ERROR,
    NODE_NORMAL,
    NODE_WARNING,
    Finding,
    LogicError,
    NodeAnnotation,
    SimulationMetrics,
    SimulationResult,
)
from ..graph_model import FrameworkGraph
from ..pipeline import PipelinePhase
from .load import StakeholderLoad

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def assign_ids(findings: List[Finding]) -> List[LogicError]:
    sequence: Dict[Tuple[str, str], int] = {}
    errors: List[LogicError] = []
    for finding in findings:
        key = (finding.rule, finding.locator)
        position = sequence.get(key, 0)
        sequence[key] = position + 1
        errors.append(
            LogicError(
                id=_build_id(finding.rule, f"{finding.rule}:{finding.locator}:{position}"),
                node_id=finding.node_id,
                edge_id=finding.edge_id,
                title=finding.title,
                message=finding.message,
                severity=finding.severity,
                fix_suggestion=finding.fix_suggestion,
                impact_score=finding.impact_score or 0,
            )
        )
    return errors


def annotate_nodes(
    graph: FrameworkGraph,
    findings: List[Finding],
    stakeholder_loads: Dict[str, StakeholderLoad],
) -> Dict[str, NodeAnnotation]:
    worst: Dict[str, str] = {}
    first_message: Dict[str, str] = {}
    for finding in findings:
        if finding.node_id is None or finding.node_id not in graph.nodes:
            continue
        first_message.setdefault(finding.node_id, finding.message)
        if finding.severity == CRITICAL:
            worst[finding.node_id] = NODE_ERROR
        elif finding.severity == WARNING and worst.get(finding.node_id) != NODE_ERROR:
            worst[finding.node_id] = NODE_WARNING

    annotations: Dict[str, NodeAnnotation] = {}
    for node_id in graph.nodes:
        load = stakeholder_loads.get(node_id)
        annotations[node_id] = NodeAnnotation(
            status=worst.get(node_id, NODE_NORMAL),
            error_message=first_message.get(node_id),
            current_load=load.current_load if load is not None else None,
        )
    return annotations


def _build_id(prefix: str, signature: str) -> str:
    digest = sha1(signature.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


class DiagnosticsReporterPhase(PipelinePhase):
    phase_name = "reporter"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        project_id = context.get("project_id")
        if not isinstance(project_id, str):
            raise InvalidInput(f"project_id must be a string, got {type(project_id).__name__}")
        clock: Optional[Clock] = context.get("clock")
        findings: List[Finding] = context.get("findings", [])
        metrics: SimulationMetrics = context["metrics"]

        result = SimulationResult(
            project_id=project_id,
            timestamp=(clock or utc_now)().isoformat(),
            status=context["status"],
            overall_score=context["overall_score"],
            errors=tuple(assign_ids(findings)),
            metrics=metrics,
            node_annotations=annotate_nodes(
                context["graph"], findings, context.get("stakeholder_loads", {})
            ),
        )
        return {"simulation_result": result}
