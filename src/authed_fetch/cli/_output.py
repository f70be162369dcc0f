from __future__ import annotations

import csv
import io
import json
from typing import Any

OUTPUT_FORMATS = ["json", "jsonl", "csv", "tsv", "table"]


def _extract_items(body: Any) -> list[Any] | None:
    """Return the list of records in a body: the body itself, or the only list in a one-key object."""
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and len(body) == 1:
        (value,) = body.values()
        if isinstance(value, list):
            return value
    return None


def _cell(value: Any) -> str:
    return json.dumps(value) if isinstance(value, (dict, list)) else str(value)


def _fieldnames(items: list[Any]) -> list[str]:
    names: dict[str, None] = {}
    for item in items:
        names.update(dict.fromkeys(item if isinstance(item, dict) else ["value"]))
    return list(names)


def _rows(items: list[Any], fieldnames: list[str]) -> list[list[str]]:
    return [
        [_cell(item.get(f, "")) if isinstance(item, dict) else _cell(item) for f in fieldnames] for item in items
    ]


def _format_delimited(items: list[Any], delimiter: str) -> str:
    fieldnames = _fieldnames(items)
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=delimiter, lineterminator="\n")
    writer.writerow(fieldnames)
    writer.writerows(_rows(items, fieldnames))
    return buf.getvalue().rstrip("\n")


def _format_table(items: list[Any]) -> str:
    fieldnames = _fieldnames(items)
    rows = _rows(items, fieldnames)
    widths = [max(len(cell) for cell in column) for column in zip(fieldnames, *rows)]

    def line(cells: list[str]) -> str:
        return "| " + " | ".join(cell.ljust(w) for cell, w in zip(cells, widths)) + " |"

    separator = "|-" + "-|-".join("-" * w for w in widths) + "-|"
    return "\n".join([line(fieldnames), separator, *(line(row) for row in rows)])


def format_response(response: Any, output_format: str = "json") -> str:
    """Render a response body for the terminal.

    JSON bodies are pretty printed, or rendered as records for the tabular formats when they hold a
    list. Anything else is returned as text.
    """
    if "application/json" not in response.headers.get("Content-Type", ""):
        return response.text
    try:
        body = response.json()
    except ValueError:
        return response.text

    items = _extract_items(body) if output_format != "json" else None
    if items is None:
        return json.dumps(body, indent=2)
    if not items:
        return ""
    if output_format == "jsonl":
        return "\n".join(json.dumps(item) for item in items)
    if output_format == "table":
        return _format_table(items)
    return _format_delimited(items, delimiter="\t" if output_format == "tsv" else ",")
