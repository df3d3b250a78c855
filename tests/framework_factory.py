from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def node(node_id: str, node_type: str, label: str | None = None, **data: Any) -> dict[str, Any]:
    return {
        "id": node_id,
        "type": node_type,
        "position": {"x": 0, "y": 0},
        "data": {"label": label or node_id, **data},
    }


def edge(
    edge_id: str,
    source: str,
    target: str,
    interaction_type: str | None = None,
    indicators: list[dict[str, Any]] | None = None,
    **data: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = dict(data)
    if interaction_type is not None:
        payload["interactionType"] = interaction_type
    if indicators is not None:
        payload["indicators"] = indicators
    return {"id": edge_id, "source": source, "target": target, "data": payload}


def indicator(label: str = "% students reading", unit: str = "%") -> dict[str, Any]:
    return {"id": f"ind-{label}", "label": label, "unit": unit, "targetValue": 80}


def sound_framework() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """A complete chain with no defects against the default inventory."""
    nodes = [
        node("sh", "stakeholder", "Teacher", inventoryId="sh_teacher"),
        node("int", "intervention", "Teacher Training", inventoryId="int_gen_training_3day"),
        node("out", "output", "Teachers trained"),
        node("oc", "outcome", "Reading improves"),
        node("goal", "goal", "NIPUN Bharat achieved"),
        node("risk", "risk", "Teachers attend training"),
    ]
    edges = [
        edge("e-assign", "int", "sh", "delivers"),
        edge("e-out", "int", "out", "delivers", [indicator("Teachers trained", "Count")]),
        edge("e-oc", "out", "oc", "leads_to", [indicator()]),
        edge("e-goal", "oc", "goal", "leads_to", [indicator("% NIPUN")]),
        edge("e-risk", "oc", "risk", "requires"),
    ]
    return nodes, edges


def fixed_clock() -> datetime:
    return datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
