"""Newline-delimited JSON client for the 3ds Max listener that draws wireframes."""

from __future__ import annotations

import json
import os
import socket
from typing import Any, Optional

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8765
DEFAULT_TIMEOUT = 120.0

ENV_HOST = "BUILDING_MCP_MAX_HOST"
ENV_PORT = "BUILDING_MCP_MAX_PORT"
ENV_TIMEOUT = "BUILDING_MCP_MAX_TIMEOUT"


class MaxClient:
    """TCP socket client that sends MAXScript to 3ds Max."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.host = host
        self.port = port
        self.timeout = timeout

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "MaxClient":
        """Build a client from ``BUILDING_MCP_MAX_*`` variables."""
        env = os.environ if environ is None else environ
        try:
            port = int(env.get(ENV_PORT, DEFAULT_PORT))
            timeout = float(env.get(ENV_TIMEOUT, DEFAULT_TIMEOUT))
        except ValueError as exc:
            raise ValueError(f"Invalid {ENV_PORT}/{ENV_TIMEOUT}: {exc}") from exc
        return cls(env.get(ENV_HOST, DEFAULT_HOST), port, timeout)

    def send_command(
        self,
        command: str,
        cmd_type: str = "maxscript",
        timeout: Optional[float] = None,
    ) -> dict[str, Any]:
        """Send one command and return the parsed JSON response.

        Raises:
            ConnectionError: the listener is not reachable.
            TimeoutError: no reply within the timeout.
            RuntimeError: empty reply or a MAXScript error.
        """
        effective_timeout = timeout or self.timeout
        request = json.dumps({"command": command, "type": cmd_type}) + "\n"

        try:
            with socket.create_connection((self.host, self.port), timeout=effective_timeout) as sock:
                sock.sendall(request.encode("utf-8"))
                response_data = b""
                while b"\n" not in response_data:
                    chunk = sock.recv(4096)
                    if not chunk:
                        break
                    response_data += chunk
        except socket.timeout:
            raise TimeoutError(
                f"3ds Max did not respond within {effective_timeout}s. "
                "Is the MCP TCP listener running in 3ds Max?"
            )
        except ConnectionRefusedError:
            raise ConnectionError(
                f"Could not connect to 3ds Max on {self.host}:{self.port}. "
                "Is the MCP TCP listener running in 3ds Max?"
            )

        response_str = response_data.decode("utf-8").strip()
        if not response_str:
            raise RuntimeError("Empty response from 3ds Max")

        response = json.loads(response_str)
        if not response.get("success", False):
            raise RuntimeError(f"MAXScript error: {response.get('error', 'Unknown error')}")
        return response
