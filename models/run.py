from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class RunMode(str, Enum):
    CHECK = "check"
    INIT = "init"  # baseline: observe and report only


class TargetOutcome(str, Enum):
    FIRST_OBSERVATION = "first_observation"
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    BASELINE = "baseline"
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"
    MALFORMED_KEY = "malformed_key"

    @property
    def is_change_event(self) -> bool:
        return self in (TargetOutcome.FIRST_OBSERVATION, TargetOutcome.CHANGED)

    @property
    def is_error(self) -> bool:
        return self in (
            TargetOutcome.FETCH_FAILED,
            TargetOutcome.PARSE_FAILED,
            TargetOutcome.MALFORMED_KEY,
        )


class TargetError(BaseModel):
    key: str
    outcome: TargetOutcome
    message: str


class TargetReport(BaseModel):
    key: str
    outcome: TargetOutcome
    address: Optional[str] = None
    old_fingerprint: Optional[str] = None
    new_fingerprint: Optional[str] = None
    line_count: Optional[int] = None  # baseline mode only
    notified: bool = False
    error: Optional[str] = None


class RunResult(BaseModel):
    mode: RunMode
    changed: bool = False
    store_path: str = ""
    reports: List[TargetReport] = Field(default_factory=list)
    errors: List[TargetError] = Field(default_factory=list)

    @property
    def is_baseline(self) -> bool:
        return self.mode == RunMode.INIT

    def count_by_outcome(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for report in self.reports:
            counts[report.outcome.value] = counts.get(report.outcome.value, 0) + 1
        return counts
