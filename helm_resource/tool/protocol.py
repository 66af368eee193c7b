"""Reading requests from stdin and writing responses to stdout.

A request is a single newline terminated JSON object. Nothing but the
response may be written to stdout, all diagnostics go to stderr.
"""

import json
import sys
from typing import Any, TextIO

from helm_resource.exceptions import InputException

# No public API
__all__: list[str] = []


def read_request(stream: TextIO | None = None) -> Any:
    """Read and decode one JSON request line."""
    line = (stream or sys.stdin).readline()
    if not line.strip():
        raise InputException("Expected a JSON request on stdin but got nothing")
    try:
        return json.loads(line)
    except json.JSONDecodeError as err:
        raise InputException(f"Request is not valid JSON: {err}") from err


def write_response(response: Any, stream: TextIO | None = None) -> None:
    """Encode a response as one JSON line."""
    out = stream or sys.stdout
    out.write(json.dumps(response))
    out.write("\n")
    out.flush()
