"""Diagnostics phases for framework graph analysis."""

from .analysis import AnalysisPhase
from .coverage import StakeholderCoveragePhase
from .graph_build import GraphModelPhase
from .inventory_resolver import InventoryResolverPhase, resolve
from .load import LoadAnalyzer, LoadAnalyzerPhase
from .logic_chain import LogicChainPhase, LogicChainValidator
from .reporting import DiagnosticsReporterPhase
from .scoring import ScoringPhase
from .structural import StructuralValidator, StructuralValidatorPhase

__all__ = [
    "GraphModelPhase",
    "InventoryResolverPhase",
    "AnalysisPhase",
    "StructuralValidatorPhase",
    "LoadAnalyzerPhase",
    "StakeholderCoveragePhase",
    "LogicChainPhase",
    "ScoringPhase",
    "DiagnosticsReporterPhase",
    "StructuralValidator",
    "LoadAnalyzer",
    "LogicChainValidator",
    "resolve",
]
