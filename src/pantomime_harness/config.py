"""Harness configuration resolved from command line flags and environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import SetupError

DEFAULT_TEST_ROOT = "test-resources/test-cases"
DEFAULT_VM = "target/debug/vm"
DEFAULT_JAVAC = "javac"
# The VM prints every native println call as "OUT: <value>"
DEFAULT_MARKER = "OUT: "

RUNTIME_LIBRARY_ENV = "PANTOMIME_RT_PATH"
REQUIRE_RUNTIME_LIBRARY_ENV = "PANTOMIME_REQUIRE_RT"
VM_ENV = "PANTOMIME_VM"
JAVAC_ENV = "JAVAC"
TEST_ROOT_ENV = "PANTOMIME_TEST_ROOT"
MARKER_ENV = "PANTOMIME_MARKER"


@dataclass
class HarnessConfig:
    """Settings shared by every stage of a harness run."""

    root: Path = Path(DEFAULT_TEST_ROOT)
    vm: str = DEFAULT_VM
    javac: str = DEFAULT_JAVAC
    marker: str = DEFAULT_MARKER
    runtime_library: Optional[Path] = None
    require_runtime_library: bool = False
    verbose: bool = False
    debug: bool = False

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides
    ) -> "HarnessConfig":
        """
        Build a config from environment variables, then apply overrides.

        Overrides set to None are ignored so unset command line options fall
        back to the environment and then to the defaults.

        Args:
            environ: Environment mapping (defaults to os.environ)
            **overrides: Field values taken from the command line

        Returns:
            The resolved HarnessConfig
        """
        environ = os.environ if environ is None else environ

        runtime_library = environ.get(RUNTIME_LIBRARY_ENV)
        values = {
            "root": Path(environ.get(TEST_ROOT_ENV, DEFAULT_TEST_ROOT)),
            "vm": environ.get(VM_ENV, DEFAULT_VM),
            "javac": environ.get(JAVAC_ENV, DEFAULT_JAVAC),
            "marker": environ.get(MARKER_ENV, DEFAULT_MARKER),
            "runtime_library": Path(runtime_library) if runtime_library else None,
            "require_runtime_library": environ.get(REQUIRE_RUNTIME_LIBRARY_ENV, "")
            in ("1", "true", "yes"),
        }

        for key, value in overrides.items():
            if value is None:
                continue
            if key in ("root", "runtime_library"):
                value = Path(value)
            values[key] = value

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Check the settings a run cannot start without."""
        if not self.marker:
            raise SetupError("The print marker must not be empty")

        if self.runtime_library is not None and not self.runtime_library.is_dir():
            raise SetupError(
                f"Runtime library path is not a directory: {self.runtime_library}"
            )

        if self.require_runtime_library and self.runtime_library is None:
            raise SetupError(
                f"{RUNTIME_LIBRARY_ENV} must point to the extracted runtime library classes"
            )
