"""Whole-repository runs and listings."""

from dataclasses import dataclass, field
from typing import List, Optional

from .case_runner import CaseRunner
from .config import HarnessConfig
from .discovery import discover_suites
from .errors import SetupError
from .models import ERROR, CaseResult, Suite, SuiteReport


@dataclass
class SuiteRunner:
    """Drives one case run per discovered fixture."""

    config: HarnessConfig = field(default_factory=HarnessConfig)
    case_runner: Optional[CaseRunner] = None

    def __post_init__(self):
        if self.case_runner is None:
            self.case_runner = CaseRunner(self.config)

    def discover(self) -> List[Suite]:
        return discover_suites(self.config.root)

    def run_all(self) -> SuiteReport:
        """
        Run every fixture of every suite, one after the other.

        A failing or broken case never stops the loop; each case gets a fresh
        pipeline run and shares nothing with the others.

        Returns:
            SuiteReport with one result per discovered fixture
        """
        suites = self.discover()
        report = SuiteReport()

        print(f"🧪 Running conformance suites from {self.config.root}")

        for suite in suites:
            print(f"\n📁 {suite.name}")
            for fixture in suite.fixtures:
                print(f"  {fixture.name}: ", end="", flush=True)
                result = self._run_case(fixture)
                report.results.append(result)

        self.print_summary(report)
        return report

    def _run_case(self, fixture) -> CaseResult:
        try:
            result = self.case_runner.run(fixture)
        except (SetupError, OSError, UnicodeError) as e:
            result = CaseResult(fixture=fixture, status=ERROR, message=str(e))
        self.case_runner.report(result)
        return result

    def list_tree(self) -> None:
        """Print the suite/case tree without running anything."""
        for suite in self.discover():
            print(f"📁 {suite.name}")
            for fixture in suite.fixtures:
                notes = []
                if fixture.has_bundle:
                    notes.append(f"bundle: {len(fixture.bundle)} files")
                if not fixture.has_expectation:
                    notes.append("no expectation")
                suffix = f" ({', '.join(notes)})" if notes else ""
                print(f"  └── {fixture.name}{suffix}")

    def print_summary(self, report: SuiteReport) -> None:
        print(f"\n{'=' * 80}")
        print("📊 CONFORMANCE SUMMARY")
        print(f"{'=' * 80}")
        print(f"🧪 Cases run: {report.total}")
        print(f"✅ Passed: {report.passed}")
        print(f"❌ Failed: {report.failed}")

        for result in report.failures:
            print(f"   📝 {result.fixture.identity}: {result.status}")
