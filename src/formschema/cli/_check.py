"""``formschema check``: compile a form definition and print its diagnostics.

Exits with code 1 if the form cannot be compiled, or if it compiles with
warnings and ``--strict`` is set.
"""

import argparse
import sys

from formschema.diagnostics import summarize, warnings_in
from formschema.errors import CompileError
from formschema.loader import load_form
from formschema.schema import compile_schema


def run_check(args: argparse.Namespace) -> None:
    """Compile ``args.form`` and report the result on stdout."""
    try:
        form = load_form(args.form)
        schema = compile_schema(form.fields)
    except (OSError, CompileError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(summarize(schema.diagnostics, field_count=len(schema)))
    if args.strict and warnings_in(schema.diagnostics):
        raise SystemExit(1)
