"""Logic chain validator: intervention-to-goal reachability and measurement coverage."""

import logging
from typing import Any, Dict, List, Set, Tuple

from ..config import CRITICAL, INFO, WARNING
from ..findings import Finding
from ..graph_model import (
    CHAIN_TYPES,
    DELIVERS,
    GOAL,
    INTERVENTION,
    LEADS_TO,
    MEASURED_TYPES,
    OUTCOME,
    RISK,
    FrameworkGraph,
    GraphNode,
)
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)

CHAIN_INTERACTIONS = (LEADS_TO, DELIVERS)


class LogicChainValidator:
    def validate(self, graph: FrameworkGraph) -> List[Finding]:
        findings: List[Finding] = []
        findings.extend(self._missing_goal(graph))
        for node in graph.nodes.values():
            if graph.degree(node.id) == 0:
                continue
            if node.type == INTERVENTION and not self._reaches_goal(graph, node):
                findings.append(
                    Finding(
                        rule="dead_end_intervention",
                        severity=CRITICAL,
                        node_id=node.id,
                        title="Dead-end Intervention",
                        message=f'Dead-end intervention: "{node.label}" has no path to a Goal.',
                        fix_suggestion="Link this intervention through an Output and an Outcome to a Goal.",
                    )
                )
            if node.type in (OUTCOME, GOAL) and not self._is_measured(graph, node):
                findings.append(
                    Finding(
                        rule="unmeasured_outcome",
                        severity=WARNING,
                        node_id=node.id,
                        title="Unmeasured Outcome",
                        message=f'No connection leading into "{node.label}" defines an indicator.',
                        fix_suggestion='Click an incoming link and select an Indicator (e.g. "% Attendance").',
                    )
                )
            if node.type == OUTCOME and not self._has_risk(graph, node):
                findings.append(
                    Finding(
                        rule="undocumented_risk",
                        severity=INFO,
                        node_id=node.id,
                        title="Undocumented Assumptions",
                        message="Consider documenting assumptions/risks for this outcome.",
                        fix_suggestion="Add a Risk node and connect it to this outcome with a \"requires\" link.",
                    )
                )
        deduplicated = _deduplicate(findings)
        logger.debug("Logic chain pass produced %d findings", len(deduplicated))
        return deduplicated

    @staticmethod
    def _missing_goal(graph: FrameworkGraph) -> List[Finding]:
        if graph.nodes_of(GOAL):
            return []
        chain_linked = any(
            graph.nodes[edge.source].type in CHAIN_TYPES and graph.nodes[edge.target].type in CHAIN_TYPES
            for edge in graph.edges.values()
        )
        if not chain_linked:
            return []
        return [
            Finding(
                rule="missing_goal",
                severity=WARNING,
                title="No Goal Defined",
                message="The framework has a results chain but no Goal node for it to lead to.",
                fix_suggestion="Add a Goal node describing the long-term impact and connect your outcomes to it.",
            )
        ]

    @staticmethod
    def _reaches_goal(graph: FrameworkGraph, start: GraphNode) -> bool:
        visited: Set[str] = {start.id}
        frontier = [start.id]
        while frontier:
            current = frontier.pop()
            for edge in graph.outgoing[current]:
                if edge.interaction_type not in CHAIN_INTERACTIONS:
                    continue
                target = graph.nodes[edge.target]
                if target.type not in MEASURED_TYPES or target.id in visited:
                    continue
                if target.type == GOAL:
                    return True
                visited.add(target.id)
                frontier.append(target.id)
        return False

    @staticmethod
    def _is_measured(graph: FrameworkGraph, node: GraphNode) -> bool:
        return any(edge.indicators for edge in graph.incoming[node.id])

    @staticmethod
    def _has_risk(graph: FrameworkGraph, node: GraphNode) -> bool:
        return any(graph.neighbour(edge, node.id).type == RISK for edge in graph.incident_edges(node.id))


def _deduplicate(findings: List[Finding]) -> List[Finding]:
    seen: Set[Tuple[str, str]] = set()
    unique = []
    for finding in findings:
        key = (finding.locator, finding.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(finding)
    return unique


class LogicChainPhase(PipelinePhase):
    phase_name = "logic_chain"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return {"logic_findings": LogicChainValidator().validate(context["graph"])}
