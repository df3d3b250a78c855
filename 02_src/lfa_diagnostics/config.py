"""Rule thresholds and score deductions for a diagnostics run."""

import os
from dataclasses import dataclass, field
from typing import Dict

from dotenv import load_dotenv

from .errors import InvalidInput

CRITICAL = "critical"
WARNING = "warning"
INFO = "info"
SEVERITIES = (CRITICAL, WARNING, INFO)


def _default_impacts() -> Dict[str, int]:
    return {CRITICAL: 15, WARNING: 5, INFO: 0}


@dataclass(frozen=True)
class EngineConfig:
    default_bandwidth: float = 3
    load_warning_percent: float = 100
    load_critical_percent: float = 150
    severity_impacts: Dict[str, int] = field(default_factory=_default_impacts)
    warning_score_threshold: float = 80

    def __post_init__(self) -> None:
        missing = [severity for severity in SEVERITIES if severity not in self.severity_impacts]
        if missing:
            raise InvalidInput(f"severity_impacts is missing: {', '.join(missing)}")
        if self.load_critical_percent < self.load_warning_percent:
            raise InvalidInput("load_critical_percent must not be below load_warning_percent")
        if self.default_bandwidth < 0:
            raise InvalidInput("default_bandwidth must not be negative")

    def impact_for(self, severity: str) -> int:
        return self.severity_impacts[severity]

    @classmethod
    def from_env(cls) -> "EngineConfig":
        load_dotenv()
        defaults = cls()
        impacts = dict(defaults.severity_impacts)
        impacts[CRITICAL] = int(_read_number("LFA_IMPACT_CRITICAL", impacts[CRITICAL]))
        impacts[WARNING] = int(_read_number("LFA_IMPACT_WARNING", impacts[WARNING]))
        impacts[INFO] = int(_read_number("LFA_IMPACT_INFO", impacts[INFO]))
        return cls(
            default_bandwidth=_read_number("LFA_DEFAULT_BANDWIDTH", defaults.default_bandwidth),
            load_warning_percent=_read_number(
                "LFA_LOAD_WARNING_PERCENT", defaults.load_warning_percent
            ),
            load_critical_percent=_read_number(
                "LFA_LOAD_CRITICAL_PERCENT", defaults.load_critical_percent
            ),
            severity_impacts=impacts,
            warning_score_threshold=_read_number(
                "LFA_WARNING_SCORE_THRESHOLD", defaults.warning_score_threshold
            ),
        )


def _read_number(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as error:
        raise InvalidInput(f"{name} must be a number, got {raw!r}") from error
