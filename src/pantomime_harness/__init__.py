"""
pantomime-harness - Conformance tests for the pantomime VM

For every fixture in the test repository the harness:
1. Compiles the Java source, together with its bundle, using javac
2. Runs the compiled classes on the VM under test
3. Keeps the VM's marker lines ("OUT: ...")
4. Compares them byte for byte with the fixture's expectation file
"""

from .case_runner import CaseRunner
from .cli import main
from .config import HarnessConfig
from .errors import HarnessError, SetupError
from .suite_runner import SuiteRunner

__all__ = [
    "CaseRunner",
    "HarnessConfig",
    "HarnessError",
    "SetupError",
    "SuiteRunner",
    "main",
]
