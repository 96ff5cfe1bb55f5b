#!/usr/bin/env python3
"""Testhelper CLI for OPAQUE registration interoperability testing.

Commands read JSON from stdin and write JSON to stdout; binary fields are
base64url encoded.

    testhelper.py start    {"password": "..."}
        -> {"request": "...", "state": "..."}
    testhelper.py finish   {"state": "...", "response": "..."}
        -> {"upload": "...", "exportKey": "..."}
"""

import json
import sys

from opaque_registration import (
    OpaqueError,
    client_register_finish,
    client_register_start,
    get_registration_finish_message,
    get_registration_start_message,
    get_registration_start_state,
)
from opaque_registration.crypto import from_base64url, to_base64url


def start() -> None:
    """Start a registration for the password on stdin."""
    data = json.loads(sys.stdin.read())
    handle = client_register_start(data["password"])
    output = {
        "request": to_base64url(get_registration_start_message(handle)),
        "state": to_base64url(get_registration_start_state(handle)),
    }
    print(json.dumps(output))


def finish() -> None:
    """Finish a registration from state and server response on stdin."""
    data = json.loads(sys.stdin.read())
    handle = client_register_finish(
        from_base64url(data["state"]),
        from_base64url(data["response"]),
    )
    output = {
        "upload": to_base64url(get_registration_finish_message(handle)),
        "exportKey": to_base64url(handle.result.export_key),
    }
    print(json.dumps(output))


def main() -> None:
    """Main entry point."""
    if len(sys.argv) < 2:
        print("usage: testhelper.py <command>", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    try:
        if command == "start":
            start()
        elif command == "finish":
            finish()
        else:
            print(f"unknown command: {command}", file=sys.stderr)
            sys.exit(1)
    except (OpaqueError, KeyError, TypeError, ValueError) as e:
        print(json.dumps({"error": type(e).__name__, "message": str(e)}), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
