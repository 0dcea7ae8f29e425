"""Data models for the conformance harness."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .verification import split_lines

PASSED = "PASSED"
FAILED = "FAILED"
COMPILE_FAILED = "COMPILE_FAILED"
ERROR = "ERROR"


@dataclass(frozen=True)
class Fixture:
    """A single Java source test input plus its optional expectation and bundle."""

    suite: str
    name: str
    path: Path
    expected_path: Optional[Path] = None
    bundle: Tuple[Path, ...] = ()

    @property
    def identity(self) -> str:
        return f"{self.suite}/{self.name}"

    @property
    def class_name(self) -> str:
        # The public class of a fixture shares the file stem
        return self.name

    @property
    def has_bundle(self) -> bool:
        return bool(self.bundle)

    @property
    def has_expectation(self) -> bool:
        return self.expected_path is not None

    @property
    def sources(self) -> List[Path]:
        """Every source file compiled for this fixture, primary file first."""
        return [self.path, *self.bundle]


@dataclass(frozen=True)
class Suite:
    """A named directory grouping related fixtures."""

    name: str
    path: Path
    fixtures: Tuple[Fixture, ...] = ()


@dataclass(frozen=True)
class CompileResult:
    """Outcome of one compiler invocation."""

    success: bool
    output_dir: Path
    command: Tuple[str, ...] = ()
    class_files: Tuple[Path, ...] = ()
    output: str = ""


@dataclass(frozen=True)
class RunResult:
    """Raw captured output of one VM invocation."""

    return_code: int
    command: Tuple[str, ...] = ()
    output: str = ""

    @property
    def lines(self) -> List[str]:
        return split_lines(self.output)


@dataclass(frozen=True)
class CaseResult:
    """Verdict of one fixture's pipeline run."""

    fixture: Fixture
    status: str  # PASSED, FAILED, COMPILE_FAILED or ERROR
    raw_output: str = ""
    expected_lines: Tuple[str, ...] = ()
    actual_lines: Tuple[str, ...] = ()
    class_file: Optional[Path] = None
    message: str = ""

    @property
    def passed(self) -> bool:
        return self.status == PASSED


@dataclass
class SuiteReport:
    """Results of a whole-repository run, in execution order."""

    results: List[CaseResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failures(self) -> List[CaseResult]:
        return [result for result in self.results if not result.passed]

    @property
    def failed(self) -> int:
        return len(self.failures)
