"""Independent analysis passes fanned out over a LangGraph workflow."""

from typing import Any, Dict, List, Optional

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from ..config import EngineConfig
from ..findings import Finding
from ..graph_model import FrameworkGraph, GraphEdge
from ..inventory import InventoryCatalog
from ..pipeline import PipelinePhase
from .coverage import StakeholderCoveragePhase
from .load import LoadAnalyzerPhase, StakeholderLoad
from .logic_chain import LogicChainPhase
from .structural import StructuralValidatorPhase


class AnalysisState(TypedDict):
    graph: FrameworkGraph
    rejected_edges: List[GraphEdge]
    catalog: InventoryCatalog
    config: EngineConfig
    resolved_node_ids: Dict[str, str]
    scale: Optional[float]
    structural_findings: List[Finding]
    load_findings: List[Finding]
    stakeholder_loads: Dict[str, StakeholderLoad]
    stakeholder_load: Dict[str, Optional[float]]
    coverage_findings: List[Finding]
    logic_findings: List[Finding]


OUTPUT_KEYS = (
    "structural_findings",
    "load_findings",
    "stakeholder_loads",
    "stakeholder_load",
    "coverage_findings",
    "logic_findings",
)


class AnalysisPhase(PipelinePhase):
    """Runs the order-insensitive passes as parallel branches; each branch owns its output keys."""

    phase_name = "analysis"

    def __init__(self, passes: List[PipelinePhase] | None = None) -> None:
        self._passes = passes or [
            StructuralValidatorPhase(),
            LoadAnalyzerPhase(),
            StakeholderCoveragePhase(),
            LogicChainPhase(),
        ]
        self._workflow = self._build_workflow()

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        result_state = self._workflow.invoke(
            {
                "graph": context["graph"],
                "rejected_edges": list(context.get("rejected_edges", [])),
                "catalog": context["catalog"],
                "config": context["config"],
                "resolved_node_ids": dict(context.get("resolved_node_ids", {})),
                "scale": context.get("scale"),
            }
        )
        return {key: result_state[key] for key in OUTPUT_KEYS if key in result_state}

    def _build_workflow(self):
        graph = StateGraph(AnalysisState)
        for analysis_pass in self._passes:
            graph.add_node(analysis_pass.phase_name, analysis_pass.run)
            graph.add_edge(START, analysis_pass.phase_name)
            graph.add_edge(analysis_pass.phase_name, END)
        return graph.compile()
