"""Graph model phase: raw canvas payload to indexed framework graph."""

from typing import Any, Dict

from ..graph_builder import GraphBuilder
from ..pipeline import PipelinePhase


class GraphModelPhase(PipelinePhase):
    phase_name = "graph_model"

    def __init__(self, builder: GraphBuilder | None = None) -> None:
        self._builder = builder or GraphBuilder()

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        outcome = self._builder.build(context.get("nodes"), context.get("edges"))
        return {
            "graph": outcome.graph,
            "rejected_edges": outcome.rejected_edges,
            "graph_findings": outcome.findings,
        }
