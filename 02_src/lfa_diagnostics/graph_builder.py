"""Normalizes raw canvas node/edge payloads into an indexed framework graph."""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .config import CRITICAL
from .errors import InvalidInput
from .findings import Finding
from .graph_model import (
    COST_LEVELS,
    INTERACTION_TYPES,
    INTERVENTION,
    MEASURED_TYPES,
    NODE_TYPES,
    STAKEHOLDER,
    FrameworkGraph,
    GraphEdge,
    GraphNode,
    Indicator,
    InterventionAttributes,
    MeasureAttributes,
    NodeAttributes,
    StakeholderAttributes,
)

logger = logging.getLogger(__name__)

# Engine output on the canvas; ignored when it comes back in.
UI_STATE_KEYS = frozenset({"status", "errorMessage", "currentLoad"})
NODE_CORE_KEYS = frozenset({"label", "inventoryId", "type"})
ATTRIBUTE_KEYS = {
    STAKEHOLDER: ("bandwidth", "influence", "level"),
    INTERVENTION: ("cost_level", "complexity", "category"),
}
MEASURE_KEYS = ("measureType", "unit")
EDGE_CORE_KEYS = frozenset({"interactionType", "indicators", "weight"})


@dataclass
class BuildOutcome:
    graph: FrameworkGraph
    findings: List[Finding] = field(default_factory=list)
    rejected_edges: List[GraphEdge] = field(default_factory=list)


class GraphBuilder:
    """Validates argument shapes and indexes the graph; defects become findings."""

    def build(self, nodes: Sequence[Mapping[str, Any]], edges: Sequence[Mapping[str, Any]]) -> BuildOutcome:
        raw_nodes = _require_sequence(nodes, "nodes")
        raw_edges = _require_sequence(edges, "edges")

        node_registry: Dict[str, GraphNode] = {}
        duplicate_nodes: List[str] = []
        for index, raw in enumerate(raw_nodes):
            node = self._parse_node(raw, index)
            if node.id in node_registry and node.id not in duplicate_nodes:
                duplicate_nodes.append(node.id)
            node_registry[node.id] = node

        edge_registry: Dict[str, GraphEdge] = {}
        duplicate_edges: List[str] = []
        for index, raw in enumerate(raw_edges):
            edge = self._parse_edge(raw, index)
            if edge.id in edge_registry and edge.id not in duplicate_edges:
                duplicate_edges.append(edge.id)
            edge_registry[edge.id] = edge

        accepted: Dict[str, GraphEdge] = {}
        rejected: List[GraphEdge] = []
        for edge_id, edge in edge_registry.items():
            if edge.source in node_registry and edge.target in node_registry:
                accepted[edge_id] = edge
            else:
                rejected.append(edge)

        findings: List[Finding] = []
        if duplicate_nodes or duplicate_edges:
            findings.append(self._duplicate_finding(duplicate_nodes, duplicate_edges))

        logger.debug(
            "Built graph: nodes=%d edges=%d rejected_edges=%d duplicates=%d",
            len(node_registry),
            len(accepted),
            len(rejected),
            len(duplicate_nodes) + len(duplicate_edges),
        )
        return BuildOutcome(
            graph=FrameworkGraph.from_parts(node_registry, accepted),
            findings=findings,
            rejected_edges=rejected,
        )

    def _parse_node(self, raw: Any, index: int) -> GraphNode:
        where = f"nodes[{index}]"
        if not isinstance(raw, Mapping):
            raise InvalidInput(f"{where} must be an object")
        node_id = _require_id(raw.get("id"), f"{where}.id")
        data = _optional_mapping(raw.get("data"), f"{where}.data")
        node_type = raw.get("type") or data.get("type")
        if node_type not in NODE_TYPES:
            raise InvalidInput(f"{where}.type must be one of {', '.join(NODE_TYPES)}, got {node_type!r}")

        label = data.get("label")
        if label is None:
            label = node_id
        elif not isinstance(label, str):
            raise InvalidInput(f"{where}.data.label must be a string")

        inventory_id = data.get("inventoryId")
        if inventory_id is not None and not isinstance(inventory_id, str):
            raise InvalidInput(f"{where}.data.inventoryId must be a string")

        position = _optional_mapping(raw.get("position"), f"{where}.position")
        attributes, consumed = self._parse_attributes(node_type, data, where)
        extras = {
            key: copy.deepcopy(value)
            for key, value in data.items()
            if key not in NODE_CORE_KEYS and key not in UI_STATE_KEYS and key not in consumed
        }
        return GraphNode(
            id=node_id,
            type=node_type,
            label=label,
            position=dict(position),
            inventory_id=inventory_id or None,
            attributes=attributes,
            extras=extras,
        )

    @staticmethod
    def _parse_attributes(
        node_type: str, data: Mapping[str, Any], where: str
    ) -> Tuple[NodeAttributes, Tuple[str, ...]]:
        if node_type == STAKEHOLDER:
            attributes = StakeholderAttributes(
                bandwidth=_optional_number(data.get("bandwidth"), f"{where}.data.bandwidth"),
                influence=_optional_number(data.get("influence"), f"{where}.data.influence"),
                level=_optional_str(data.get("level"), f"{where}.data.level"),
            )
            return attributes, ATTRIBUTE_KEYS[STAKEHOLDER]
        if node_type == INTERVENTION:
            attributes = InterventionAttributes(
                cost_level=normalize_cost_level(data.get("cost_level"), f"{where}.data.cost_level"),
                complexity=_optional_number(data.get("complexity"), f"{where}.data.complexity"),
                category=_optional_str(data.get("category"), f"{where}.data.category"),
            )
            return attributes, ATTRIBUTE_KEYS[INTERVENTION]
        if node_type in MEASURED_TYPES:
            attributes = MeasureAttributes(
                measure_type=_optional_str(data.get("measureType"), f"{where}.data.measureType"),
                unit=_optional_str(data.get("unit"), f"{where}.data.unit"),
            )
            return attributes, MEASURE_KEYS
        return None, ()

    def _parse_edge(self, raw: Any, index: int) -> GraphEdge:
        where = f"edges[{index}]"
        if not isinstance(raw, Mapping):
            raise InvalidInput(f"{where} must be an object")
        edge_id = _require_id(raw.get("id"), f"{where}.id")
        source = _require_id(raw.get("source"), f"{where}.source")
        target = _require_id(raw.get("target"), f"{where}.target")
        data = _optional_mapping(raw.get("data"), f"{where}.data")

        interaction_type = data.get("interactionType")
        if interaction_type is not None and interaction_type not in INTERACTION_TYPES:
            raise InvalidInput(
                f"{where}.data.interactionType must be one of {', '.join(INTERACTION_TYPES)}, "
                f"got {interaction_type!r}"
            )
        weight = _optional_number(data.get("weight"), f"{where}.data.weight")
        if weight is not None and weight < 0:
            raise InvalidInput(f"{where}.data.weight must not be negative")

        return GraphEdge(
            id=edge_id,
            source=source,
            target=target,
            interaction_type=interaction_type,
            indicators=self._parse_indicators(data.get("indicators"), where),
            weight=weight,
            extras={key: copy.deepcopy(value) for key, value in data.items() if key not in EDGE_CORE_KEYS},
        )

    @staticmethod
    def _parse_indicators(raw: Any, where: str) -> Tuple[Indicator, ...]:
        if raw is None:
            return ()
        if not isinstance(raw, (list, tuple)):
            raise InvalidInput(f"{where}.data.indicators must be a list")
        indicators: List[Indicator] = []
        for position, item in enumerate(raw):
            item_where = f"{where}.data.indicators[{position}]"
            if not isinstance(item, Mapping):
                raise InvalidInput(f"{item_where} must be an object")
            label = _optional_str(item.get("label"), f"{item_where}.label") or ""
            indicators.append(
                Indicator(
                    id=_optional_str(item.get("id"), f"{item_where}.id") or f"{label or 'indicator'}-{position}",
                    label=label,
                    unit=_optional_str(item.get("unit"), f"{item_where}.unit") or "",
                    target_value=_optional_number(item.get("targetValue"), f"{item_where}.targetValue"),
                )
            )
        return tuple(indicators)

    @staticmethod
    def _duplicate_finding(duplicate_nodes: List[str], duplicate_edges: List[str]) -> Finding:
        parts = []
        if duplicate_nodes:
            parts.append(f"node ids {', '.join(duplicate_nodes)}")
        if duplicate_edges:
            parts.append(f"edge ids {', '.join(duplicate_edges)}")
        return Finding(
            rule="duplicate_id",
            severity=CRITICAL,
            title="Duplicate Identifiers",
            message=f"The framework reuses {' and '.join(parts)}; only the last definition of each was analysed.",
            fix_suggestion="Give every node and connection a unique id.",
        )


def normalize_cost_level(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or value.upper() not in COST_LEVELS:
        raise InvalidInput(f"{where} must be one of {', '.join(COST_LEVELS)}, got {value!r}")
    return value.upper()


def _require_sequence(value: Any, name: str) -> Sequence[Any]:
    if not isinstance(value, (list, tuple)):
        raise InvalidInput(f"{name} must be a list, got {type(value).__name__}")
    return value


def _require_id(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{where} must be a non-empty string")
    return value


def _optional_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidInput(f"{where} must be an object")
    return value


def _optional_number(value: Any, where: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{where} must be a number, got {value!r}")
    return value


def _optional_str(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInput(f"{where} must be a string, got {value!r}")
    return value
