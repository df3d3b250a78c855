"""Logical Framework graph diagnostics and simulation engine."""

from .config import EngineConfig
from .engine import build_default_phases, run_simulation
from .errors import DiagnosticsError, InvalidInput
from .findings import LogicError, NodeAnnotation, SimulationMetrics, SimulationResult
from .graph_builder import GraphBuilder
from .graph_model import FrameworkGraph, GraphEdge, GraphNode
from .inventory import InventoryCatalog, load_default_catalog
from .pipeline import PipelinePhase, PipelineRunner

__all__ = [
    "run_simulation",
    "build_default_phases",
    "EngineConfig",
    "DiagnosticsError",
    "InvalidInput",
    "LogicError",
    "NodeAnnotation",
    "SimulationMetrics",
    "SimulationResult",
    "GraphBuilder",
    "FrameworkGraph",
    "GraphNode",
    "GraphEdge",
    "InventoryCatalog",
    "load_default_catalog",
    "PipelinePhase",
    "PipelineRunner",
]
