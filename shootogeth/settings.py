"""Network addresses and clock helpers shared by client and server."""

from __future__ import annotations

import time

SERVER_HOST_ADDR = "127.0.0.1:8080"
CLIENT_CONNECT_TO_ADDR = "127.0.0.1:8080"


def split_address(address: str) -> tuple[str, int]:
    """Split "host:port" (or "[v6host]:port") into a host and an integer port."""
    host, sep, port_text = address.rpartition(":")
    if not sep or not host or not port_text:
        raise ValueError(f"address {address!r} is not of the form host:port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_text)
    except ValueError as exc:
        raise ValueError(f"invalid port in address {address!r}") from exc
    if not 0 <= port <= 65535:
        raise ValueError(f"port {port} out of range in address {address!r}")
    return host, port


def utc_now_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000