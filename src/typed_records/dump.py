"""Tool for rendering records as readable text."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from typed_records import accessor, query
from typed_records.errors import DefaultSyntaxError, RecordError
from typed_records.json_io import dumps_records, load_records
from typed_records.parsing import parse_default_literal
from typed_records.record import Record, as_record
from typed_records.schema import is_well_formed_record

INDENT = "    "


def format_value(value: Any) -> str:
    """Format a value for display."""
    if value is None:
        return "undef"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        return f"{value:.6g}"
    elif isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    elif isinstance(value, Record):
        return f"<{value.type_name}>"
    elif isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    return str(value)


def dump_record(record: Any, indent: int = 0) -> str:
    """Render a record as lines of text.

    The first line names the type. Each attribute follows as
    ``<position>: <name> (<type>[: <default>]): <value>``. Attributes whose
    value is itself a record end with ``:`` and the nested record is
    rendered beneath, one indent level deeper.
    """
    record = as_record(record)
    prefix = INDENT * indent
    lines = [f"{prefix}{record.type_name}"]

    for position, descriptor in enumerate(record.schema.attributes, start=1):
        type_text = descriptor.type.code if descriptor.type is not None else "-"
        if descriptor.default is not None:
            type_text += f": {format_value(descriptor.default)}"
        head = f"{prefix}{position}: {descriptor.name} ({type_text})"

        value = accessor.get(record, descriptor.name)
        if is_well_formed_record(value):
            lines.append(f"{head}:")
            lines.append(dump_record(value, indent + 1))
        else:
            lines.append(f"{head}: {format_value(value)}")

    return "\n".join(lines)


def _parse_where(text: str) -> tuple[str, Any]:
    """Parse a NAME=VALUE filter; VALUE is a literal or a bare string."""
    name, sep, raw = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{text}'")
    try:
        value = parse_default_literal(raw)
    except DefaultSyntaxError:
        value = raw
    return name, value


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the dump tool."""
    parser = argparse.ArgumentParser(
        description="Render records stored in a JSON file",
    )
    parser.add_argument(
        "file",
        type=Path,
        help="JSON file holding a record or a list of records",
    )
    parser.add_argument(
        "-w", "--where",
        type=_parse_where,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Keep only records whose attribute equals VALUE (repeatable)",
    )
    parser.add_argument(
        "-s", "--sort-by",
        metavar="NAME",
        help="Sort records by an attribute",
    )
    parser.add_argument(
        "-g", "--group-by",
        metavar="NAME",
        help="Group records by an attribute",
    )
    parser.add_argument(
        "-a", "--attr",
        metavar="NAME",
        help="Print only the values of one attribute",
    )
    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "-n", "--limit",
        type=int,
        default=None,
        help="Limit number of records to display",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug messages",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.file.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    try:
        records = load_records(args.file)
    except (OSError, ValueError, RecordError) as e:
        print(f"Error loading records: {e}", file=sys.stderr)
        return 1

    if args.where:
        records = query.select_by_attrs_values(records, args.where)
    if args.sort_by:
        records = query.sort_by_attr(records, args.sort_by)
    if args.limit is not None:
        records = records[:args.limit]

    if args.group_by:
        groups = query.group_by_attr(records, args.group_by)
        keys = query.group_keys(records, args.group_by)
    else:
        groups = [records]
        keys = [None]

    for key, group in zip(keys, groups):
        if args.group_by:
            print(f"== {args.group_by} = {format_value(key)} ({len(group)} records)")
        if args.attr:
            for value in query.values_for_attr(group, args.attr):
                print(format_value(value))
        elif args.json:
            print(dumps_records(group))
        else:
            for record in group:
                print(dump_record(record))
                print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
