"""Typed node/edge primitives and the indexed framework graph."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

STAKEHOLDER = "stakeholder"
INTERVENTION = "intervention"
OUTPUT = "output"
OUTCOME = "outcome"
GOAL = "goal"
RISK = "risk"
COMMENT = "comment"
NODE_TYPES = (STAKEHOLDER, INTERVENTION, OUTPUT, OUTCOME, GOAL, RISK, COMMENT)
MEASURED_TYPES = (OUTPUT, OUTCOME, GOAL)
CHAIN_TYPES = (INTERVENTION, OUTPUT, OUTCOME, GOAL)

DELIVERS = "delivers"
MONITORS = "monitors"
LEADS_TO = "leads_to"
REQUIRES = "requires"
INTERACTION_TYPES = (DELIVERS, MONITORS, LEADS_TO, REQUIRES)

COST_LEVELS = ("LOW", "MEDIUM", "HIGH")


@dataclass(frozen=True)
class StakeholderAttributes:
    bandwidth: Optional[float] = None
    influence: Optional[float] = None
    level: Optional[str] = None


@dataclass(frozen=True)
class InterventionAttributes:
    cost_level: Optional[str] = None
    complexity: Optional[float] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class MeasureAttributes:
    measure_type: Optional[str] = None
    unit: Optional[str] = None


NodeAttributes = Union[StakeholderAttributes, InterventionAttributes, MeasureAttributes, None]


@dataclass(frozen=True)
class GraphNode:
    id: str
    type: str
    label: str
    position: Dict[str, float] = field(default_factory=dict)
    inventory_id: Optional[str] = None
    attributes: NodeAttributes = None
    # Caller-owned keys, passed through without inspection.
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Indicator:
    id: str
    label: str
    unit: str
    target_value: Optional[float] = None


@dataclass(frozen=True)
class GraphEdge:
    id: str
    source: str
    target: str
    interaction_type: Optional[str] = None
    indicators: Tuple[Indicator, ...] = ()
    weight: Optional[float] = None
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FrameworkGraph:
    nodes: Dict[str, GraphNode] = field(default_factory=dict)
    edges: Dict[str, GraphEdge] = field(default_factory=dict)
    outgoing: Dict[str, List[GraphEdge]] = field(default_factory=dict)
    incoming: Dict[str, List[GraphEdge]] = field(default_factory=dict)
    by_type: Dict[str, List[GraphNode]] = field(default_factory=dict)

    @classmethod
    def from_parts(cls, nodes: Dict[str, GraphNode], edges: Dict[str, GraphEdge]) -> "FrameworkGraph":
        graph = cls(nodes=dict(nodes), edges=dict(edges))
        graph.outgoing = {node_id: [] for node_id in graph.nodes}
        graph.incoming = {node_id: [] for node_id in graph.nodes}
        graph.by_type = {node_type: [] for node_type in NODE_TYPES}
        for node in graph.nodes.values():
            graph.by_type[node.type].append(node)
        for edge in graph.edges.values():
            graph.outgoing[edge.source].append(edge)
            graph.incoming[edge.target].append(edge)
        return graph

    def with_nodes(self, nodes: Dict[str, GraphNode]) -> "FrameworkGraph":
        return FrameworkGraph.from_parts(nodes, self.edges)

    def nodes_of(self, node_type: str) -> List[GraphNode]:
        return list(self.by_type.get(node_type, []))

    def incident_edges(self, node_id: str) -> List[GraphEdge]:
        return self.outgoing.get(node_id, []) + self.incoming.get(node_id, [])

    def degree(self, node_id: str) -> int:
        return len(self.outgoing.get(node_id, [])) + len(self.incoming.get(node_id, []))

    def neighbour(self, edge: GraphEdge, node_id: str) -> GraphNode:
        other_id = edge.target if edge.source == node_id else edge.source
        return self.nodes[other_id]
