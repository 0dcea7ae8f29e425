"""Suite and fixture discovery in the on-disk fixture repository."""

from pathlib import Path
from typing import List, Optional, Tuple

from .errors import SetupError
from .models import Fixture, Suite

SOURCE_SUFFIX = ".java"
EXPECTED_SUFFIX = ".expected"
BUNDLE_SUFFIX = ".bundle"


def expected_path_for(source: Path) -> Path:
    """`Foo.java` is paired with `Foo.java.expected`."""
    return source.with_name(source.name + EXPECTED_SUFFIX)


def bundle_dir_for(source: Path) -> Path:
    """`Foo.java` owns the auxiliary sources in `Foo.java.bundle/`."""
    return source.with_name(source.name + BUNDLE_SUFFIX)


def collect_bundle(source: Path) -> Tuple[Path, ...]:
    """Return every .java file in the fixture's bundle directory, if any."""
    bundle_dir = bundle_dir_for(source)
    if not bundle_dir.is_dir():
        return ()

    try:
        return tuple(
            sorted(
                path.resolve()
                for path in bundle_dir.rglob(f"*{SOURCE_SUFFIX}")
                if path.is_file()
            )
        )
    except OSError as e:
        raise SetupError(f"Unable to read bundle directory {bundle_dir}: {e}") from e


def fixture_from_paths(
    source: Path, expected: Optional[Path] = None, suite: str = ""
) -> Fixture:
    """
    Build a fixture from a Java source path.

    Args:
        source: Path to the fixture's .java file
        expected: Explicit expectation file (defaults to `<source>.expected` if present)
        suite: Name of the owning suite (the parent directory if empty)

    Returns:
        The Fixture, with its bundle resolved by directory convention
    """
    source = Path(source).resolve()
    if not source.is_file():
        raise SetupError(f"Fixture file not found: {source}")

    if expected is None:
        candidate = expected_path_for(source)
        expected = candidate if candidate.is_file() else None
    else:
        expected = Path(expected).resolve()

    return Fixture(
        suite=suite or source.parent.name,
        name=source.stem,
        path=source,
        expected_path=expected,
        bundle=collect_bundle(source),
    )


def discover_fixtures(suite_dir: Path, suite_name: str) -> List[Fixture]:
    """Find every fixture directly inside a suite directory."""
    try:
        entries = sorted(suite_dir.iterdir())
    except OSError as e:
        raise SetupError(f"Unable to read suite directory {suite_dir}: {e}") from e

    return [
        fixture_from_paths(entry, suite=suite_name)
        for entry in entries
        if entry.is_file() and entry.name.endswith(SOURCE_SUFFIX)
    ]


def discover_suites(root: Path) -> List[Suite]:
    """
    Enumerate the suites under a fixture root.

    Every immediate subdirectory of the root is a suite. A missing or
    unreadable root aborts the enumeration.

    Args:
        root: The fixture repository root

    Returns:
        Suites with their fixtures, ordered by name
    """
    root = Path(root)
    if not root.is_dir():
        raise SetupError(f"Test root not found: {root}")

    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        raise SetupError(f"Unable to read test root {root}: {e}") from e

    suites = []
    for entry in entries:
        if not entry.is_dir():
            continue
        fixtures = discover_fixtures(entry, entry.name)
        suites.append(Suite(name=entry.name, path=entry, fixtures=tuple(fixtures)))

    return suites


def find_fixture(root: Path, suite: str, case: str) -> Fixture:
    """Look up a single case, accepting the case name with or without `.java`."""
    suite_dir = Path(root) / suite
    if not suite_dir.is_dir():
        raise SetupError(f"Suite not found: {suite_dir}")

    file_name = case if case.endswith(SOURCE_SUFFIX) else case + SOURCE_SUFFIX
    return fixture_from_paths(suite_dir / file_name, suite=suite)
