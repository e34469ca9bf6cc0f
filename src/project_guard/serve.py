"""Local HTTP server exposing the tools as a JSON API.

GET  /               tool listing
GET  /api/tools      tool listing
GET  /health         liveness check
POST /api/tools/<n>  call tool <n> with a JSON object body
"""

from __future__ import annotations

import json
from functools import partial
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

from .logging import get_logger
from .tools import TOOLS, InvalidArgumentsError, UnknownToolError, call_tool
from .usage import UsageLog

logger = get_logger("serve")

TOOL_PREFIX = "/api/tools/"


class GuardHandler(BaseHTTPRequestHandler):
    """HTTP handler that dispatches POSTed arguments to tools."""

    def __init__(self, *args, usage_log: UsageLog, default_category: str, **kwargs):
        self._usage_log = usage_log
        self._default_category = default_category
        super().__init__(*args, **kwargs)

    def do_GET(self):
        if self.path in ("/", "/api/tools"):
            self._send_json(200, {"tools": TOOLS})
        elif self.path == "/health":
            self._send_json(200, {"status": "ok"})
        else:
            self._send_json(404, {"error": f"Not found: {self.path}"})

    def do_POST(self):
        if not self.path.startswith(TOOL_PREFIX):
            self._send_json(404, {"error": f"Not found: {self.path}"})
            return
        name = self.path[len(TOOL_PREFIX):]

        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = -1
        if length < 0:
            self._send_json(400, {"error": "Invalid Content-Length"})
            return
        raw = self.rfile.read(length) if length else b""
        try:
            arguments = json.loads(raw) if raw else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            self._send_json(400, {"error": "Request body must be JSON"})
            return
        if not isinstance(arguments, dict):
            self._send_json(400, {"error": "Request body must be a JSON object"})
            return

        try:
            payload = call_tool(
                name,
                arguments,
                usage_log=self._usage_log,
                default_category=self._default_category,
            )
        except UnknownToolError as e:
            self._send_json(404, {"error": str(e)})
            return
        except InvalidArgumentsError as e:
            self._send_json(400, {"error": str(e)})
            return
        self._send_json(200, payload)

    def _send_json(self, status: int, data: Any):
        content = json.dumps(data).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(content)))
        self.end_headers()
        self.wfile.write(content)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(
    host: str = "127.0.0.1",
    port: int = 8420,
    usage_log: UsageLog | None = None,
    default_category: str = "component",
) -> HTTPServer:
    """Build (but do not start) the server. Port 0 picks a free port."""
    handler = partial(
        GuardHandler,
        usage_log=usage_log or UsageLog(),
        default_category=default_category,
    )
    HTTPServer.allow_reuse_address = True
    return HTTPServer((host, port), handler)


def start_server(
    host: str = "127.0.0.1",
    port: int = 8420,
    usage_log: UsageLog | None = None,
    default_category: str = "component",
) -> None:
    """Serve until interrupted."""
    server = make_server(host, port, usage_log, default_category)
    logger.info("Serving on http://%s:%d", *server.server_address[:2])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
