"""Score, status and summary metrics from the collected findings."""

import logging
from collections import Counter
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..config import CRITICAL, EngineConfig
from ..findings import FAILURE, SUCCESS, WARNING_STATUS, Finding, SimulationMetrics
from ..graph_model import COST_LEVELS, INTERVENTION, FrameworkGraph, InterventionAttributes
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)

# Pass order fixes the order of findings in the report.
FINDING_KEYS = (
    "graph_findings",
    "resolution_findings",
    "structural_findings",
    "load_findings",
    "coverage_findings",
    "logic_findings",
)


def with_impacts(findings: List[Finding], config: EngineConfig) -> List[Finding]:
    return [
        finding
        if finding.impact_score is not None
        else replace(finding, impact_score=config.impact_for(finding.severity))
        for finding in findings
    ]


def overall_score(findings: List[Finding]) -> int:
    deduction = sum(finding.impact_score or 0 for finding in findings)
    return max(0, min(100, 100 - deduction))


def derive_status(score: int, findings: List[Finding], config: EngineConfig) -> str:
    if any(finding.severity == CRITICAL for finding in findings):
        return FAILURE
    if score < config.warning_score_threshold:
        return WARNING_STATUS
    return SUCCESS


def total_cost(graph: FrameworkGraph) -> str:
    counts = Counter(
        node.attributes.cost_level
        for node in graph.nodes_of(INTERVENTION)
        if isinstance(node.attributes, InterventionAttributes) and node.attributes.cost_level
    )
    if not counts:
        return COST_LEVELS[0]
    # Ties go to the higher tier.
    return max(COST_LEVELS, key=lambda tier: (counts.get(tier, 0), COST_LEVELS.index(tier)))


def complexity_score(graph: FrameworkGraph) -> float:
    values = [
        node.attributes.complexity
        for node in graph.nodes_of(INTERVENTION)
        if isinstance(node.attributes, InterventionAttributes) and node.attributes.complexity is not None
    ]
    if not values:
        return 0
    return round(sum(values) / len(values), 2)


class ScoringPhase(PipelinePhase):
    phase_name = "scoring"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        config: EngineConfig = context["config"]
        collected: List[Finding] = []
        for key in FINDING_KEYS:
            collected.extend(context.get(key, []))
        findings = with_impacts(collected, config)
        score = overall_score(findings)
        status = derive_status(score, findings, config)
        stakeholder_load: Optional[Dict[str, Optional[float]]] = context.get("stakeholder_load")
        metrics = SimulationMetrics(
            total_cost=total_cost(context["graph"]),
            complexity_score=complexity_score(context["graph"]),
            stakeholder_load=dict(stakeholder_load or {}),
        )
        logger.debug("Scored %d findings: score=%d status=%s", len(findings), score, status)
        return {
            "findings": findings,
            "overall_score": score,
            "status": status,
            "metrics": metrics,
        }
