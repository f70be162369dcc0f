from __future__ import annotations

import argparse
import json
from typing import Any

from authed_fetch import DEFAULT_ENV_CONFIG_FILE_PATH
from authed_fetch.cli._output import OUTPUT_FORMATS, format_response
from authed_fetch.client import REFRESH_TOKEN_ENV_VAR, create_dispatcher
from authed_fetch.env_config import load_env_config, resolve_environment
from authed_fetch.options import RequestOptions

COMMAND = "call"


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    call_parser = subparsers.add_parser(
        COMMAND,
        help="Make an authenticated HTTP request",
    )
    call_parser.add_argument("url", metavar="URL", help="Full URL to call")
    call_parser.add_argument(
        "-X",
        "--request",
        dest="method",
        default="GET",
        metavar="METHOD",
        help="HTTP method (default: GET)",
    )
    call_parser.add_argument("-d", "--data", help="Request body (JSON string)")
    call_parser.add_argument(
        "-H",
        "--header",
        action="append",
        dest="headers",
        metavar="HDR",
        help="Header in 'Key: Value' format (repeatable)",
    )
    call_parser.add_argument(
        "--env-config-file-path",
        default=DEFAULT_ENV_CONFIG_FILE_PATH,
        help=f"Environment config file path (default: {DEFAULT_ENV_CONFIG_FILE_PATH})",
    )
    call_parser.add_argument("--env", dest="env_name", help="Force a specific environment (skip URL-based matching)")
    call_parser.add_argument(
        "--refresh-token",
        help=f"Refresh token of the session (default: ${REFRESH_TOKEN_ENV_VAR})",
    )
    call_parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="json",
        help="Output format: json (default), jsonl (one JSON object per line), csv, tsv, table (markdown)",
    )


def _parse_headers(raw: list[str] | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    for h in raw or []:
        if ": " not in h:
            raise ValueError(f"Invalid header format '{h}'. Expected 'Key: Value'.")
        key, value = h.split(": ", 1)
        headers[key] = value
    return headers


def _parse_body(raw: str | None, headers: dict[str, str]) -> Any:
    if not raw:
        return None
    try:
        json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON data: {e}") from e
    headers.setdefault("Content-Type", "application/json")
    return raw.encode()


def run(parsed: argparse.Namespace) -> int:
    config = load_env_config(parsed.env_config_file_path)
    env = resolve_environment(config, parsed.url, parsed.env_name)

    headers = _parse_headers(parsed.headers)
    body = _parse_body(parsed.data, headers)
    options = RequestOptions(method=parsed.method.upper(), headers=headers, body=body)

    dispatcher = create_dispatcher(env, refresh_token=parsed.refresh_token)
    response = dispatcher.dispatch(parsed.url, options)

    output = format_response(response, parsed.output_format)
    if output:
        print(output)
    return 0 if response.ok else 1
