"""
Check outcome models.
Every step of a suite produces one CheckResult; a run collects them in a SuiteReport.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class CheckStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


class CheckResult(BaseModel):
    name: str
    status: CheckStatus
    lines: List[str] = []
    url: Optional[str] = None
    status_code: Optional[int] = None
    response_time: Optional[float] = None
    error: Optional[str] = None
    detail: Dict[str, Any] = {}

    @classmethod
    def ok(cls, name: str, *lines: str, **fields) -> "CheckResult":
        return cls(name=name, status=CheckStatus.OK, lines=list(lines), **fields)

    @classmethod
    def failed(cls, name: str, *lines: str, **fields) -> "CheckResult":
        return cls(name=name, status=CheckStatus.FAILED, lines=list(lines), **fields)

    @classmethod
    def skipped(cls, name: str, *lines: str, **fields) -> "CheckResult":
        return cls(name=name, status=CheckStatus.SKIPPED, lines=list(lines), **fields)


class SuiteReport(BaseModel):
    suite: str
    results: List[CheckResult] = []
    started_at: datetime
    finished_at: Optional[datetime] = None

    def _count(self, status: CheckStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def passed(self) -> int:
        return self._count(CheckStatus.OK)

    @property
    def failed(self) -> int:
        return self._count(CheckStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(CheckStatus.SKIPPED)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def result(self, name: str) -> CheckResult:
        for result in self.results:
            if result.name == name:
                return result
        raise KeyError(name)
