"""Diagnostics phase abstraction and the sequential runner over a context dict."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

logger = logging.getLogger(__name__)


class PipelinePhase(ABC):
    """One diagnostics step; reads the run context and returns only the keys it produces."""

    phase_name: str

    @abstractmethod
    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class PipelineRunner:
    def __init__(self, phases: Iterable[PipelinePhase]) -> None:
        self.phases: List[PipelinePhase] = list(phases)

    @property
    def phase_names(self) -> List[str]:
        return [phase.phase_name for phase in self.phases]

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        current = dict(context)
        for phase in self.phases:
            started = time.perf_counter()
            produced = phase.run(current)
            if not isinstance(produced, dict):
                raise TypeError(
                    f"Phase '{phase.phase_name}' must return dict context, got {type(produced).__name__}."
                )
            current.update(produced)
            logger.debug(
                "Phase %s produced [%s] in %.1f ms",
                phase.phase_name,
                ", ".join(sorted(produced)),
                (time.perf_counter() - started) * 1000,
            )
        return current
