"""VM invocation: runs compiled classes and captures what the VM prints."""

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from .errors import SetupError
from .models import RunResult
from .verification import decode_output


class VirtualMachine:
    """Runs the VM binary under test as a black box."""

    def __init__(
        self,
        executable: str,
        runtime_library: Optional[Path] = None,
        verbose: bool = False,
    ):
        self.executable = executable
        self.runtime_library = runtime_library
        self.verbose = verbose

    def command(self, class_files: Sequence[Path], entry_class: str) -> list:
        """Class paths first, the entry class always last."""
        cmd = [self.executable] + [str(path) for path in class_files]
        if self.runtime_library is not None:
            cmd.append(str(self.runtime_library))
        cmd.append(entry_class)
        return cmd

    def run(self, class_files: Sequence[Path], entry_class: str) -> RunResult:
        """
        Run the VM once and capture stdout and stderr together, verbatim.

        A non-zero exit is recorded but not treated as an error; whatever the
        VM printed is still compared against the expectation.

        Args:
            class_files: Compiled class files (or class directories) to load
            entry_class: Name of the class whose main method is started

        Returns:
            RunResult with the raw combined output
        """
        cmd = self.command(class_files, entry_class)

        if self.verbose:
            print(f"🔧 Running command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except OSError as e:
            raise SetupError(f"Unable to run VM {self.executable}: {e}") from e

        if self.verbose:
            print(f"📊 VM exit code: {result.returncode}")

        return RunResult(
            return_code=result.returncode,
            command=tuple(cmd),
            output=decode_output(result.stdout),
        )
