from __future__ import annotations

import argparse
import sys

from authed_fetch.token_store import STORE_MODES, make_store

COMMAND = "token"


def register_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        COMMAND,
        help="Manage the stored bearer token",
    )
    parser.add_argument(
        "--token-store",
        choices=[m for m in STORE_MODES if m not in ("memory", "none")],
        default="auto",
        help="Token store: auto (keyring if available, file otherwise), keyring or file (default: auto)",
    )
    subs = parser.add_subparsers(dest="token_action", metavar="ACTION", required=True)

    subs.add_parser("get", help="Print the stored bearer token")
    set_p = subs.add_parser("set", help="Store a bearer token")
    set_p.add_argument("token", metavar="TOKEN", help="Bearer token to store")
    subs.add_parser("clear", help="Remove the stored bearer token")

    return parser


def run(parsed: argparse.Namespace) -> int:
    store = make_store(parsed.token_store)
    if parsed.token_action == "get":
        token = store.get()
        if token is None:
            print("No token stored", file=sys.stderr)
            return 1
        print(token)
    elif parsed.token_action == "set":
        store.set(parsed.token)
        print(f"Token stored ({type(store).__name__})")
    elif parsed.token_action == "clear":
        store.remove()
        print(f"Token cleared ({type(store).__name__})")
    return 0
