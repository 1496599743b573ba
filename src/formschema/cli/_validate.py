"""``formschema validate``: run one JSON record through a form definition.

Prints the result as JSON (``{"success": ..., "data"|"errors": ...}``) and
exits with code 1 when the record is invalid.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from formschema.errors import CompileError
from formschema.executor import validate
from formschema.loader import load_form
from formschema.schema import compile_schema


def _read_record(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def run_validate(args: argparse.Namespace) -> None:
    try:
        form = load_form(args.form)
        schema = compile_schema(form.fields)
        record = _read_record(args.record)
    except (OSError, ValueError, CompileError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not isinstance(record, dict):
        print("Error: record must be a JSON object", file=sys.stderr)
        raise SystemExit(1)

    result = validate(schema, record)
    print(json.dumps(result.to_dict(), indent=2))
    if not result:
        raise SystemExit(1)
