"""Structural validator: orphans, dangling edges, edge grammar, chain cycles, islands."""

import logging
from typing import Any, Dict, FrozenSet, List, Set, Tuple

from ..config import CRITICAL, WARNING
from ..findings import Finding
from ..graph_model import (
    CHAIN_TYPES,
    COMMENT,
    DELIVERS,
    GOAL,
    INTERVENTION,
    LEADS_TO,
    MONITORS,
    OUTCOME,
    OUTPUT,
    REQUIRES,
    RISK,
    STAKEHOLDER,
    FrameworkGraph,
    GraphEdge,
)
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)

COMPATIBILITY: Dict[str, FrozenSet[Tuple[str, str]]] = {
    DELIVERS: frozenset(
        {
            (INTERVENTION, OUTPUT),
            (INTERVENTION, OUTCOME),
            (INTERVENTION, STAKEHOLDER),
            (STAKEHOLDER, INTERVENTION),
        }
    ),
    LEADS_TO: frozenset(
        {
            (INTERVENTION, OUTPUT),
            (INTERVENTION, OUTCOME),
            (OUTPUT, OUTPUT),
            (OUTPUT, OUTCOME),
            (OUTPUT, GOAL),
            (OUTCOME, OUTCOME),
            (OUTCOME, GOAL),
        }
    ),
    MONITORS: frozenset(
        {
            (STAKEHOLDER, INTERVENTION),
            (STAKEHOLDER, OUTPUT),
            (STAKEHOLDER, OUTCOME),
            (STAKEHOLDER, GOAL),
            (INTERVENTION, STAKEHOLDER),
        }
    ),
    REQUIRES: frozenset(
        {
            (OUTCOME, RISK),
            (GOAL, RISK),
            (INTERVENTION, STAKEHOLDER),
            (STAKEHOLDER, INTERVENTION),
        }
    ),
}

# Nodes a goal may point at without leaving the chain.
_GOAL_ATTACHMENTS = (RISK, COMMENT)

_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


class StructuralValidator:
    def validate(self, graph: FrameworkGraph, rejected_edges: List[GraphEdge]) -> List[Finding]:
        findings: List[Finding] = []
        findings.extend(self._orphans(graph))
        findings.extend(self._dangling(rejected_edges))
        findings.extend(self._incompatible_edges(graph))
        findings.extend(self._direction(graph))
        findings.extend(self._cycles(graph))
        findings.extend(self._islands(graph))
        logger.debug("Structural pass produced %d findings", len(findings))
        return findings

    @staticmethod
    def _orphans(graph: FrameworkGraph) -> List[Finding]:
        findings = []
        for node in graph.nodes.values():
            if node.type == COMMENT or graph.degree(node.id) > 0:
                continue
            findings.append(
                Finding(
                    rule="orphan_node",
                    severity=WARNING,
                    node_id=node.id,
                    title="Orphan Node",
                    message=f'The node "{node.label}" is disconnected from the framework.',
                    fix_suggestion="Connect this node to the rest of the framework.",
                )
            )
        return findings

    @staticmethod
    def _dangling(rejected_edges: List[GraphEdge]) -> List[Finding]:
        return [
            Finding(
                rule="dangling_edge",
                severity=CRITICAL,
                edge_id=edge.id,
                title="Dangling Connection",
                message=(
                    f'The connection "{edge.id}" links {edge.source} to {edge.target}, '
                    "but at least one of them does not exist."
                ),
                fix_suggestion="Delete this connection or redraw it between existing nodes.",
            )
            for edge in rejected_edges
        ]

    @staticmethod
    def _incompatible_edges(graph: FrameworkGraph) -> List[Finding]:
        findings = []
        for edge in graph.edges.values():
            if edge.interaction_type is None:
                continue
            source = graph.nodes[edge.source]
            target = graph.nodes[edge.target]
            if COMMENT in (source.type, target.type):
                continue
            if (source.type, target.type) in COMPATIBILITY[edge.interaction_type]:
                continue
            allowed = ", ".join(
                f"{src} to {dst}" for src, dst in sorted(COMPATIBILITY[edge.interaction_type])
            )
            findings.append(
                Finding(
                    rule="incompatible_edge",
                    severity=WARNING,
                    edge_id=edge.id,
                    title="Incompatible Connection",
                    message=(
                        f'"{edge.interaction_type}" cannot link a {source.type} '
                        f'("{source.label}") to a {target.type} ("{target.label}").'
                    ),
                    fix_suggestion=f'Use "{edge.interaction_type}" only from {allowed}, or change the connection type.',
                )
            )
        return findings

    @staticmethod
    def _direction(graph: FrameworkGraph) -> List[Finding]:
        # Typed edges are judged by COMPATIBILITY; only untyped arrows are checked here.
        findings = []
        for edge in graph.edges.values():
            if edge.interaction_type is not None:
                continue
            source = graph.nodes[edge.source]
            target = graph.nodes[edge.target]
            if source.type == OUTCOME and target.type == INTERVENTION:
                findings.append(
                    Finding(
                        rule="backward_flow",
                        severity=CRITICAL,
                        edge_id=edge.id,
                        title="Backward Logic Flow",
                        message=(
                            f'The outcome "{source.label}" leads to the intervention "{target.label}". '
                            "Outcomes are results, not activities."
                        ),
                        fix_suggestion="Reverse the direction of the arrow.",
                    )
                )
            elif source.type == GOAL and target.type not in _GOAL_ATTACHMENTS:
                findings.append(
                    Finding(
                        rule="goal_outgoing",
                        severity=WARNING,
                        edge_id=edge.id,
                        title="Goal has Outgoing Connection",
                        message=f'The goal "{source.label}" is the final destination but leads to "{target.label}".',
                        fix_suggestion="Remove the arrow pointing away from the Goal.",
                    )
                )
        return findings

    @staticmethod
    def _cycles(graph: FrameworkGraph) -> List[Finding]:
        chain_ids = [node.id for node in graph.nodes.values() if node.type in CHAIN_TYPES]
        chain_set = set(chain_ids)
        successors: Dict[str, List[str]] = {
            node_id: [edge.target for edge in graph.outgoing[node_id] if edge.target in chain_set]
            for node_id in chain_ids
        }

        color: Dict[str, int] = {node_id: _UNVISITED for node_id in chain_ids}
        closing: List[str] = []
        seen: Set[str] = set()
        for root in chain_ids:
            if color[root] != _UNVISITED:
                continue
            color[root] = _IN_PROGRESS
            stack = [(root, iter(successors[root]))]
            while stack:
                node_id, children = stack[-1]
                child = next(children, None)
                if child is None:
                    color[node_id] = _DONE
                    stack.pop()
                    continue
                if color[child] == _IN_PROGRESS:
                    if child not in seen:
                        seen.add(child)
                        closing.append(child)
                elif color[child] == _UNVISITED:
                    color[child] = _IN_PROGRESS
                    stack.append((child, iter(successors[child])))

        return [
            Finding(
                rule="chain_cycle",
                severity=CRITICAL,
                node_id=node_id,
                title="Circular Logic",
                message=f"Circular logic: {graph.nodes[node_id].label} eventually depends on itself.",
                fix_suggestion="Trace your arrows and remove the backward connection.",
            )
            for node_id in closing
        ]

    @staticmethod
    def _islands(graph: FrameworkGraph) -> List[Finding]:
        connected = [
            node.id
            for node in graph.nodes.values()
            if node.type != COMMENT and graph.degree(node.id) > 0
        ]
        remaining = set(connected)
        components = 0
        for start in connected:
            if start not in remaining:
                continue
            components += 1
            remaining.discard(start)
            frontier = [start]
            while frontier:
                current = frontier.pop()
                for edge in graph.incident_edges(current):
                    other = graph.neighbour(edge, current).id
                    if other in remaining:
                        remaining.discard(other)
                        frontier.append(other)
        if components <= 1:
            return []
        return [
            Finding(
                rule="logic_islands",
                severity=WARNING,
                title="Disconnected Logic Islands",
                message=f"The framework splits into {components} groups of nodes that never connect to each other.",
                fix_suggestion="Ensure all parts of your project connect to the main Goal or Outcome.",
            )
        ]


class StructuralValidatorPhase(PipelinePhase):
    phase_name = "structural"

    def __init__(self, validator: StructuralValidator | None = None) -> None:
        self._validator = validator or StructuralValidator()

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        findings = self._validator.validate(context["graph"], list(context.get("rejected_edges", [])))
        return {"structural_findings": findings}
