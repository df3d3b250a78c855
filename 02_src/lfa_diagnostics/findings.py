"""Findings collected by the analysis passes and the final report shapes."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

SUCCESS = "success"
WARNING_STATUS = "warning"
FAILURE = "failure"

NODE_NORMAL = "normal"
NODE_WARNING = "warning"
NODE_ERROR = "error"


@dataclass(frozen=True)
class Finding:
    rule: str
    severity: str
    title: str
    message: str
    fix_suggestion: str
    node_id: Optional[str] = None
    edge_id: Optional[str] = None
    impact_score: Optional[int] = None

    @property
    def locator(self) -> str:
        return self.node_id or self.edge_id or "graph"


@dataclass(frozen=True)
class LogicError:
    id: str
    title: str
    message: str
    severity: str
    fix_suggestion: str
    impact_score: int
    node_id: Optional[str] = None
    edge_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id}
        if self.node_id is not None:
            payload["nodeId"] = self.node_id
        if self.edge_id is not None:
            payload["edgeId"] = self.edge_id
        payload.update(
            {
                "title": self.title,
                "message": self.message,
                "severity": self.severity,
                "fixSuggestion": self.fix_suggestion,
                "impactScore": self.impact_score,
            }
        )
        return payload


@dataclass(frozen=True)
class SimulationMetrics:
    total_cost: str
    complexity_score: float
    stakeholder_load: Dict[str, Optional[float]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCost": self.total_cost,
            "complexityScore": self.complexity_score,
            "stakeholderLoad": dict(self.stakeholder_load),
        }


@dataclass(frozen=True)
class NodeAnnotation:
    status: str = NODE_NORMAL
    error_message: Optional[str] = None
    current_load: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"status": self.status}
        if self.error_message is not None:
            payload["errorMessage"] = self.error_message
        if self.current_load is not None:
            payload["currentLoad"] = self.current_load
        return payload


@dataclass(frozen=True)
class SimulationResult:
    project_id: str
    timestamp: str
    status: str
    overall_score: int
    errors: Tuple[LogicError, ...]
    metrics: SimulationMetrics
    node_annotations: Dict[str, NodeAnnotation] = field(default_factory=dict)

    def errors_by_severity(self, severity: str) -> List[LogicError]:
        return [error for error in self.errors if error.severity == severity]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectId": self.project_id,
            "timestamp": self.timestamp,
            "status": self.status,
            "overallScore": self.overall_score,
            "errors": [error.to_dict() for error in self.errors],
            "metrics": self.metrics.to_dict(),
            "nodeAnnotations": {
                node_id: annotation.to_dict()
                for node_id, annotation in self.node_annotations.items()
            },
        }
