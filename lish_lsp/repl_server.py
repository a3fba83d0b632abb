from __future__ import annotations

"""
TCP REPL server for lish.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(def $x (ls))"}
- Response: {"ok": true, "result": <printed value>} or {"ok": false, "error": <message>}

One Interpreter is shared by every connection, so definitions persist across
requests and clients. Evaluations are serialized.
"""

import json
import logging
import socket
import threading
from typing import Tuple

from lish.debug_utils.pprint import format_value
from lish.errors import LishError
from lish.interpreter import Interpreter

logger = logging.getLogger(__name__)

HOST = "127.0.0.1"
PORT = 8765


class ReplServer:
    def __init__(self, host: str = HOST, port: int = PORT, interp: Interpreter | None = None):
        self.host = host
        self.port = port
        self.interp = interp if interp is not None else Interpreter()
        self._lock = threading.Lock()

    def handle_request(self, raw: bytes) -> dict:
        """Decode one request line and produce its response object."""
        try:
            req = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict) or req.get("cmd") != "eval":
            cmd = req.get("cmd") if isinstance(req, dict) else None
            return {"ok": False, "error": f"Unknown cmd: {cmd}"}
        code = req.get("code", "")
        if not isinstance(code, str):
            return {"ok": False, "error": "code must be a string"}
        try:
            with self._lock:
                result = self.interp.eval(code)
        except LishError as ex:
            return {"ok": False, "error": str(ex)}
        return {"ok": True, "result": format_value(result, quote_strings=True)}

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("lish REPL listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_request(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    ReplServer().serve_forever()
