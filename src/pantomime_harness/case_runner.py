"""Single-fixture pipeline: compile, run on the VM, filter, compare, report."""

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .compiler import JavaCompiler
from .config import HarnessConfig
from .errors import SetupError
from .models import COMPILE_FAILED, FAILED, PASSED, CaseResult, Fixture
from .verification import (
    compare_with_expectation,
    filter_marker_lines,
    read_expected_lines,
)
from .vm import VirtualMachine

SCRATCH_PREFIX = "pantomime-"
CLASSES_DIRNAME = "classes"


@dataclass
class CaseRunner:
    """Runs one fixture through the verification pipeline."""

    config: HarnessConfig = field(default_factory=HarnessConfig)
    compiler: Optional[JavaCompiler] = None
    vm: Optional[VirtualMachine] = None

    def __post_init__(self):
        if self.compiler is None:
            self.compiler = JavaCompiler(self.config.javac, verbose=self.config.verbose)
        if self.vm is None:
            self.vm = VirtualMachine(
                self.config.vm,
                runtime_library=self.config.runtime_library,
                verbose=self.config.verbose,
            )

    def run(self, fixture: Fixture) -> CaseResult:
        """
        Run the compile, VM, filter and compare stages for one fixture.

        Stages run strictly in order. A compile failure ends the case before
        the VM is started.

        Args:
            fixture: The fixture to verify

        Returns:
            CaseResult carrying the verdict and everything needed for a dump
        """
        self._check_setup(fixture)
        scratch_dir = self._make_scratch_dir(fixture)
        classes_dir = scratch_dir / CLASSES_DIRNAME
        classes_dir.mkdir()

        compiled = self.compiler.compile(fixture, classes_dir)
        if not compiled.success:
            return CaseResult(
                fixture=fixture,
                status=COMPILE_FAILED,
                message=compiled.output,
            )

        class_file = self._resolve_class_file(fixture, compiled.class_files, classes_dir)
        run = self.vm.run(compiled.class_files, fixture.class_name)

        actual_lines = filter_marker_lines(run.lines, self.config.marker)
        matches = compare_with_expectation(
            actual_lines, fixture.expected_path, scratch_dir
        )

        return CaseResult(
            fixture=fixture,
            status=PASSED if matches else FAILED,
            raw_output=run.output,
            expected_lines=tuple(read_expected_lines(fixture.expected_path)),
            actual_lines=tuple(actual_lines),
            class_file=class_file,
            message=f"VM exit code: {run.return_code}",
        )

    def report(self, result: CaseResult) -> None:
        """Print the verdict, with a full dump when the case failed."""
        if result.status == PASSED:
            print("✅ PASSED")
            if self.config.debug:
                self._dump("VM output", result.raw_output)
            return

        if result.status == COMPILE_FAILED:
            print(f"❌ FAILED: unable to compile {result.fixture.path}")
            if result.message:
                self._dump("Compiler output", result.message)
            return

        if result.status != FAILED:
            print(f"❌ {result.status}: {result.message}")
            return

        print("❌ FAILED: output does not match expectation")
        self._dump("VM output", result.raw_output)
        print(f"📝 {result.message}")
        print(f"📝 Class file: {result.class_file}")
        self._dump("Expected", "\n".join(result.expected_lines))
        self._dump("Actual", "\n".join(result.actual_lines))

    def _check_setup(self, fixture: Fixture) -> None:
        if not fixture.path.is_file():
            raise SetupError(f"Fixture file not found: {fixture.path}")
        if not fixture.has_expectation or not fixture.expected_path.is_file():
            raise SetupError(f"Expectation file not found for {fixture.identity}")

    def _make_scratch_dir(self, fixture: Fixture) -> Path:
        try:
            return Path(
                tempfile.mkdtemp(prefix=f"{SCRATCH_PREFIX}{fixture.suite}-{fixture.name}-")
            )
        except OSError as e:
            raise SetupError(f"Unable to create scratch directory: {e}") from e

    def _resolve_class_file(self, fixture, class_files, classes_dir) -> Path:
        for path in class_files:
            if path.name == f"{fixture.class_name}.class":
                return path
        return classes_dir / f"{fixture.class_name}.class"

    def _dump(self, title: str, text: str) -> None:
        print(f"{'=' * 20} {title} {'=' * 20}")
        print(text.rstrip("\n"))
        print("=" * (len(title) + 42))
