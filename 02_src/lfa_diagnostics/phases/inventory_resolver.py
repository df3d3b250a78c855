"""Inventory resolver: attaches canonical catalog attributes to nodes."""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..config import CRITICAL, WARNING
from ..findings import Finding
from ..graph_model import (
    INTERVENTION,
    MEASURED_TYPES,
    STAKEHOLDER,
    FrameworkGraph,
    GraphNode,
    InterventionAttributes,
    MeasureAttributes,
    StakeholderAttributes,
)
from ..inventory import (
    ITEM_INDICATOR,
    ITEM_INTERVENTION,
    ITEM_STAKEHOLDER,
    IndicatorItem,
    InterventionItem,
    InventoryCatalog,
    InventoryItem,
    StakeholderItem,
)
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)

ACCEPTED_ITEM_TYPES = {
    STAKEHOLDER: ITEM_STAKEHOLDER,
    INTERVENTION: ITEM_INTERVENTION,
    **{node_type: ITEM_INDICATOR for node_type in MEASURED_TYPES},
}


@dataclass
class ResolutionOutcome:
    graph: FrameworkGraph
    findings: List[Finding] = field(default_factory=list)
    resolved_ids: Dict[str, str] = field(default_factory=dict)


def resolve(graph: FrameworkGraph, catalog: InventoryCatalog) -> ResolutionOutcome:
    """Returns a resolved copy of ``graph``; the input graph and its nodes are left as-is."""
    resolved_nodes: Dict[str, GraphNode] = {}
    findings: List[Finding] = []
    resolved_ids: Dict[str, str] = {}

    for node_id, node in graph.nodes.items():
        resolved_nodes[node_id] = node
        if not node.inventory_id:
            continue

        item = catalog.get(node.inventory_id)
        if item is None:
            findings.append(
                Finding(
                    rule="unknown_inventory",
                    severity=WARNING,
                    node_id=node_id,
                    title="Unknown Inventory Reference",
                    message=(
                        f'"{node.label}" points at inventory item "{node.inventory_id}", '
                        "which is not in the catalog. Only its own attributes were used."
                    ),
                    fix_suggestion="Pick this node again from the inventory palette.",
                )
            )
            continue

        expected = ACCEPTED_ITEM_TYPES.get(node.type)
        if item.type != expected:
            findings.append(
                Finding(
                    rule="inventory_type_mismatch",
                    severity=CRITICAL,
                    node_id=node_id,
                    title="Inventory Type Mismatch",
                    message=(
                        f'"{node.label}" is a {node.type} node but references the '
                        f'{item.type} "{item.label}".'
                    ),
                    fix_suggestion=f"Replace it with a {node.type} from the inventory, or change the node type.",
                )
            )
            continue

        resolved_nodes[node_id] = replace(node, attributes=_merge_attributes(node, item))
        resolved_ids[node_id] = item.id

    logger.debug(
        "Resolved inventory: resolved=%d findings=%d", len(resolved_ids), len(findings)
    )
    return ResolutionOutcome(
        graph=graph.with_nodes(resolved_nodes),
        findings=findings,
        resolved_ids=resolved_ids,
    )


def _merge_attributes(node: GraphNode, item: InventoryItem):
    inline = node.attributes
    if isinstance(item, StakeholderItem):
        own = inline if isinstance(inline, StakeholderAttributes) else StakeholderAttributes()
        return StakeholderAttributes(
            bandwidth=_prefer(item.bandwidth, own.bandwidth),
            influence=_prefer(item.influence, own.influence),
            level=_prefer(item.level, own.level),
        )
    if isinstance(item, InterventionItem):
        own = inline if isinstance(inline, InterventionAttributes) else InterventionAttributes()
        return InterventionAttributes(
            cost_level=_prefer(item.cost_level, own.cost_level),
            complexity=_prefer(item.complexity, own.complexity),
            category=_prefer(item.category, own.category),
        )
    if isinstance(item, IndicatorItem):
        own = inline if isinstance(inline, MeasureAttributes) else MeasureAttributes()
        return MeasureAttributes(
            measure_type=_prefer(item.measure_type, own.measure_type),
            unit=_prefer(item.unit, own.unit),
        )
    return inline


def _prefer(canonical: Optional[Any], inline: Optional[Any]) -> Optional[Any]:
    return canonical if canonical is not None else inline


class InventoryResolverPhase(PipelinePhase):
    phase_name = "inventory_resolver"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        outcome = resolve(context["graph"], context["catalog"])
        return {
            "graph": outcome.graph,
            "resolution_findings": outcome.findings,
            "resolved_node_ids": outcome.resolved_ids,
        }
