"""
Sequential suite runner.
Steps run one at a time on a shared client session. Each prints a header and the
lines of its result. A step never stops the ones after it unless it is marked required.
"""

from datetime import datetime
from typing import Awaitable, Callable, List, Optional

import aiohttp

from ragcheck.config import SmokeConfig
from ragcheck.logging_config import get_logger, log_check_result, log_run_boundary
from ragcheck.models import CheckResult, CheckStatus, SuiteReport

CheckFunc = Callable[[aiohttp.ClientSession, SmokeConfig], Awaitable[CheckResult]]

logger = get_logger(__name__)


class Step:
    def __init__(self, name: str, title: str, check: CheckFunc, required: bool = False):
        self.name = name
        self.title = title
        self.check = check
        self.required = required


class Suite:
    def __init__(self, name: str, banner: List[str], steps: List[Step],
                 spaced: bool = False, summary: bool = True):
        self.name = name
        self.banner = banner
        self.steps = steps
        # blank line before every step header
        self.spaced = spaced
        self.summary = summary


class SmokeRunner:
    def __init__(self, config: SmokeConfig, output: Callable[[str], None] = print):
        self.config = config
        self.output = output

    async def run(self, suite: Suite, session: Optional[aiohttp.ClientSession] = None) -> SuiteReport:
        """Run every step of the suite in order and return the collected report."""
        if session is None:
            async with aiohttp.ClientSession(timeout=self.config.client_timeout()) as own_session:
                return await self._run_steps(suite, own_session)
        return await self._run_steps(suite, session)

    async def _run_steps(self, suite: Suite, session: aiohttp.ClientSession) -> SuiteReport:
        report = SuiteReport(suite=suite.name, started_at=datetime.now())
        logger.info(f"Starting suite {suite.name} ({len(suite.steps)} steps)")
        log_run_boundary(suite.name, "start", steps=len(suite.steps))

        for line in suite.banner:
            self.output(line)

        blocking: Optional[Step] = None
        for step in suite.steps:
            if blocking is not None:
                result = CheckResult.skipped(step.name, error=f"skipped after {blocking.name} failed")
            else:
                result = await self._run_step(suite, step, session)
                if step.required and result.status == CheckStatus.FAILED:
                    logger.error(f"Required step {step.name} failed, skipping the rest of {suite.name}")
                    blocking = step

            report.results.append(result)
            log_check_result(suite.name, result.name, result.status.value, result.url,
                             result.status_code, result.response_time, result.error)

        report.finished_at = datetime.now()
        if suite.summary:
            self.output("")
            self.output(f"🎯 Summary: {report.passed} passed, {report.failed} failed, "
                        f"{report.skipped} skipped")

        logger.info(f"Finished suite {suite.name}: {report.passed} ok, "
                    f"{report.failed} failed, {report.skipped} skipped")
        log_run_boundary(suite.name, "end", passed=report.passed,
                         failed=report.failed, skipped=report.skipped)
        return report

    async def _run_step(self, suite: Suite, step: Step, session: aiohttp.ClientSession) -> CheckResult:
        if suite.spaced:
            self.output("")
        self.output(step.title)

        result = await step.check(session, self.config)
        if result.name != step.name:
            result = result.model_copy(update={"name": step.name})

        for line in result.lines:
            self.output(line)
        logger.debug(f"{suite.name}/{step.name}: {result.status.value}")
        return result
