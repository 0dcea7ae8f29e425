"""Marker-line filtering and exact comparison against expectation files."""

import filecmp
from pathlib import Path
from typing import Iterable, List

ACTUAL_FILENAME = "actual.out"


def decode_output(data: bytes) -> str:
    """Decode captured process output; invalid UTF-8 becomes U+FFFD."""
    return data.decode("utf-8", errors="replace")


def split_lines(text: str) -> List[str]:
    """Split on "\\n" only, dropping the empty piece after a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def filter_marker_lines(lines: Iterable[str], marker: str) -> List[str]:
    """Keep, in order, the lines that contain the print marker."""
    return [line for line in lines if marker in line]


def materialize_lines(lines: Iterable[str], path: Path) -> Path:
    """Write lines to a file, each terminated by a single newline."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        for line in lines:
            f.write(line + "\n")
    return path


def compare_with_expectation(
    actual_lines: Iterable[str], expected_path: Path, scratch_dir: Path
) -> bool:
    """
    Compare filtered output with an expectation file, byte for byte.

    The actual lines are written to the scratch directory first so both sides
    are compared as files, line terminators and line count included.

    Args:
        actual_lines: Filtered marker lines
        expected_path: The fixture's expectation file
        scratch_dir: The case's scratch directory

    Returns:
        True if both files have identical contents
    """
    actual_path = materialize_lines(actual_lines, Path(scratch_dir) / ACTUAL_FILENAME)
    return filecmp.cmp(actual_path, expected_path, shallow=False)


def read_expected_lines(expected_path: Path) -> List[str]:
    return split_lines(decode_output(Path(expected_path).read_bytes()))
