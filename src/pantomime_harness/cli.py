"""Command line interface for the conformance harness."""

import argparse
import sys
from importlib.metadata import version

from .config import HarnessConfig
from .discovery import find_fixture, fixture_from_paths
from .errors import SetupError
from .models import COMPILE_FAILED
from .suite_runner import SuiteRunner

EXIT_SETUP_ERROR = 2
EXIT_FAILURES = 1


def build_parser() -> argparse.ArgumentParser:
    pkg_version = version("pantomime-harness")

    parser = argparse.ArgumentParser(
        description="pantomime-harness - Conformance tests for the pantomime VM"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pantomime-harness {pkg_version}",
    )
    parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Fixture repository root (default: test-resources/test-cases)",
    )
    parser.add_argument(
        "--vm", type=str, default=None, help="Path to the VM binary under test"
    )
    parser.add_argument(
        "--javac", type=str, default=None, help="Java compiler executable"
    )
    parser.add_argument(
        "--marker",
        type=str,
        default=None,
        help="Substring identifying program output lines (default: 'OUT: ')",
    )
    parser.add_argument(
        "--rt-path",
        type=str,
        default=None,
        help="Directory of extracted runtime library classes (env: PANTOMIME_RT_PATH)",
    )
    parser.add_argument(
        "--require-rt",
        action="store_true",
        default=None,
        help="Fail unless a runtime library directory is configured",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show every compiler and VM command that is run",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    case_parser = subparsers.add_parser("case", help="Run a single fixture")
    case_parser.add_argument("suite", help="Suite directory name")
    case_parser.add_argument("case", help="Fixture name, with or without .java")
    case_parser.add_argument(
        "-d", "--debug", action="store_true", help="Dump VM output even on success"
    )

    file_parser = subparsers.add_parser(
        "file", help="Run a Java file against an expectation file"
    )
    file_parser.add_argument("java_file", help="Path to the .java fixture")
    file_parser.add_argument("expected_file", help="Path to the expectation file")
    file_parser.add_argument(
        "-d", "--debug", action="store_true", help="Dump VM output even on success"
    )

    all_parser = subparsers.add_parser("all", help="Run every suite")
    all_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with a non-zero status if any case fails",
    )

    subparsers.add_parser("list", help="List suites and cases without running them")

    return parser


def main(runner_class=SuiteRunner, argv=None) -> int:
    """Main function with command line argument parsing."""
    args = build_parser().parse_args(argv)

    try:
        config = HarnessConfig.from_env(
            root=args.root,
            vm=args.vm,
            javac=args.javac,
            marker=args.marker,
            runtime_library=args.rt_path,
            require_runtime_library=args.require_rt,
            verbose=args.verbose,
            debug=getattr(args, "debug", False),
        )
        runner = runner_class(config=config)

        if args.command == "list":
            runner.list_tree()
            return 0

        if args.command == "all":
            report = runner.run_all()
            if args.strict and report.failed:
                return EXIT_FAILURES
            return 0

        if args.command == "case":
            fixture = find_fixture(config.root, args.suite, args.case)
        else:
            fixture = fixture_from_paths(args.java_file, args.expected_file)

        print(f"🧪 {fixture.identity}: ", end="", flush=True)
        result = runner.case_runner.run(fixture)
        runner.case_runner.report(result)
        if result.status == COMPILE_FAILED:
            return EXIT_SETUP_ERROR
        return 0

    except SetupError as e:
        print(f"💀 FATAL: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR
