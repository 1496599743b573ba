"""formschema CLI: check form definitions and validate records against them.

Entry point registered as ``formschema`` in ``pyproject.toml``::

    [project.scripts]
    formschema = "formschema.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``formschema`` command."""
    parser = argparse.ArgumentParser(
        prog="formschema",
        description="formschema: compile declarative form definitions into validators.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log compiler diagnostics at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- formschema check -------------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Compile a form definition and report issues"
    )
    check_parser.add_argument("form", help="Path to a JSON form definition")
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 on warnings as well as errors",
    )

    # -- formschema validate ----------------------------------------------
    validate_parser = subparsers.add_parser(
        "validate", help="Validate a JSON record against a form"
    )
    validate_parser.add_argument("form", help="Path to a JSON form definition")
    validate_parser.add_argument("record", help="Path to a JSON record, or - for stdin")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")
        logging.getLogger("formschema").setLevel(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from formschema.cli._check import run_check

        run_check(args)
    elif args.command == "validate":
        from formschema.cli._validate import run_validate

        run_validate(args)
