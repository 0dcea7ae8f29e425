"""Java compiler invocation for fixtures and their bundles."""

import subprocess
from pathlib import Path

from .errors import SetupError
from .models import CompileResult, Fixture
from .verification import decode_output


class JavaCompiler:
    """Compiles a fixture, plus its bundle, into a class output directory."""

    def __init__(self, executable: str = "javac", verbose: bool = False):
        self.executable = executable
        self.verbose = verbose

    def compile(self, fixture: Fixture, output_dir: Path) -> CompileResult:
        """
        Compile a fixture in a single compiler invocation.

        The bundle sources are passed in the same call as the fixture, so the
        files may reference each other's types.

        Args:
            fixture: The fixture to compile
            output_dir: Empty writable directory receiving the class files

        Returns:
            CompileResult listing the produced class files on success
        """
        cmd = [self.executable, "-d", str(output_dir)] + [
            str(source) for source in fixture.sources
        ]

        if self.verbose:
            print(f"🔧 Running command: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            raise SetupError(f"Unable to run Java compiler {self.executable}: {e}") from e

        output = decode_output(result.stdout + result.stderr)

        if self.verbose:
            print(f"📊 Compiler exit code: {result.returncode}")

        if result.returncode != 0:
            return CompileResult(
                success=False, output_dir=output_dir, command=tuple(cmd), output=output
            )

        return CompileResult(
            success=True,
            output_dir=output_dir,
            command=tuple(cmd),
            class_files=tuple(sorted(output_dir.rglob("*.class"))),
            output=output,
        )
