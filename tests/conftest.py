"""Shared fixtures: fake javac/VM executables and a small fixture repository."""

import stat
from pathlib import Path

import pytest

FAKE_JAVAC = """#!/bin/sh
echo "$@" >> "{log}"
out=""
while [ $# -gt 0 ]; do
  case "$1" in
    -d) out="$2"; shift 2 ;;
    *)
      if grep -q BROKEN "$1"; then
        echo "$1:1: error: cannot find symbol" >&2
        exit 1
      fi
      touch "$out/$(basename "$1" .java).class"
      shift
      ;;
  esac
done
"""

FAKE_VM = """#!/bin/sh
echo "$@" >> "{log}"
printf '%s' '{output}'
{extra}
exit {exit_code}
"""

STATIC_INNER_CLASS = """public class StaticInnerClass {

    public static void main(String[] args) {
        Inner.innerPrint(5);
    }

    public static class Inner {
        public static void innerPrint(int val) {
            println(val);
        }

        public static native void println(int val);
    }

}
"""


def write_executable(path: Path, content: str) -> Path:
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def log_lines(log: Path):
    if not log.exists():
        return []
    return log.read_text().splitlines()


@pytest.fixture
def fake_javac(tmp_path):
    """A javac stand-in that touches one .class per source and logs each call."""
    tools = tmp_path / "tools"
    tools.mkdir(exist_ok=True)
    log = tools / "javac.log"
    script = write_executable(tools / "javac", FAKE_JAVAC.format(log=log))
    return script, log


@pytest.fixture
def make_vm(tmp_path):
    """Factory for VM stand-ins printing fixed output."""
    tools = tmp_path / "tools"
    tools.mkdir(exist_ok=True)

    def _make(output="RUNNING\nOUT: 5\nDONE\n", exit_code=0, stderr=""):
        log = tools / "vm.log"
        extra = f"echo '{stderr}' >&2" if stderr else ""
        script = write_executable(
            tools / "vm",
            FAKE_VM.format(log=log, output=output, extra=extra, exit_code=exit_code),
        )
        return script, log

    return _make


@pytest.fixture
def fixture_repo(tmp_path):
    """
    A repository with two suites:

    inner-classes/StaticInnerClass.java  (expects OUT: 5)
    bundles/CrossFile.java + CrossFile.java.bundle/{Helper,util/Other}.java
    """
    root = tmp_path / "test-cases"

    inner = root / "inner-classes"
    inner.mkdir(parents=True)
    (inner / "StaticInnerClass.java").write_text(STATIC_INNER_CLASS)
    (inner / "StaticInnerClass.java.expected").write_text("OUT: 5\n")

    bundles = root / "bundles"
    bundle_dir = bundles / "CrossFile.java.bundle"
    (bundle_dir / "util").mkdir(parents=True)
    (bundles / "CrossFile.java").write_text("public class CrossFile {}\n")
    (bundles / "CrossFile.java.expected").write_text("OUT: 42\n")
    (bundle_dir / "Helper.java").write_text("public class Helper {}\n")
    (bundle_dir / "util" / "Other.java").write_text("public class Other {}\n")
    (bundle_dir / "notes.txt").write_text("not a source\n")

    return root


CRASHING_VM = """#!/bin/sh
printf 'OUT: 5\\n\\377\\376 crash\\n'
exit 101
"""


@pytest.fixture
def crashing_vm(tmp_path):
    """A VM stand-in that prints bytes which are not valid UTF-8 and exits 101."""
    tools = tmp_path / "tools"
    tools.mkdir(exist_ok=True)
    return write_executable(tools / "crashing-vm", CRASHING_VM)
