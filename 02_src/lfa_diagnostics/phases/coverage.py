"""Stakeholder coverage: authorities the catalog requires above a programme scale."""

import logging
from typing import Any, Dict, List

from ..config import WARNING
from ..findings import Finding
from ..inventory import InventoryCatalog
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


def missing_authorities(
    catalog: InventoryCatalog, resolved_node_ids: Dict[str, str], scale: float | None
) -> List[Finding]:
    if scale is None:
        return []
    present = set(resolved_node_ids.values())
    findings = []
    for item in catalog.stakeholders():
        if item.required_for_scale is None or scale <= item.required_for_scale:
            continue
        if item.id in present:
            continue
        findings.append(
            Finding(
                rule="missing_authority",
                severity=WARNING,
                title="Missing Authority Node",
                message=(
                    f"The programme covers {scale:g} sites, which needs {item.label} approval "
                    f"above {item.required_for_scale} sites."
                ),
                fix_suggestion=f'Drag a "{item.label}" node from the Stakeholder panel to ensure compliance.',
            )
        )
    logger.debug("Coverage pass at scale=%s produced %d findings", scale, len(findings))
    return findings


class StakeholderCoveragePhase(PipelinePhase):
    phase_name = "coverage"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        findings = missing_authorities(
            context["catalog"], context.get("resolved_node_ids", {}), context.get("scale")
        )
        return {"coverage_findings": findings}
