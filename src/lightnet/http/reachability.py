"""Reachability oracles answering "is the network reachable right now"."""

from __future__ import annotations

import logging
import socket
from typing import Callable

from .protocols import ConnectionStatus, ReachabilityOracle

logger = logging.getLogger(__name__)


class RouteReachability:
    """
    Reports the network as available when the OS has a route to a probe address.

    Connecting a UDP socket only selects a route and sends no packets, so
    the check is cheap and works without DNS.

    Example:
        oracle = RouteReachability()
        if oracle.connection_status() == ConnectionStatus.UNAVAILABLE:
            print("offline")
    """

    def __init__(self, probe_host: str = "8.8.8.8", probe_port: int = 53) -> None:
        self.probe_host = probe_host
        self.probe_port = probe_port

    def connection_status(self) -> ConnectionStatus:
        try:
            family = socket.AF_INET6 if ":" in self.probe_host else socket.AF_INET
            with socket.socket(family, socket.SOCK_DGRAM) as sock:
                sock.connect((self.probe_host, self.probe_port))
        except OSError as e:
            logger.debug(f"No route to {self.probe_host}:{self.probe_port}: {e}")
            return ConnectionStatus.UNAVAILABLE
        return ConnectionStatus.AVAILABLE


class StaticReachability:
    """Oracle with a fixed answer, for tests and environments without a route check."""

    def __init__(self, status: ConnectionStatus = ConnectionStatus.AVAILABLE) -> None:
        self.status = status

    def connection_status(self) -> ConnectionStatus:
        return self.status


def connection_status(factory: Callable[[], ReachabilityOracle]) -> ConnectionStatus:
    """
    Build an oracle and query it, treating any failure as UNAVAILABLE.

    Args:
        factory: Callable creating the oracle (e.g. the RouteReachability class)

    Returns:
        The oracle's answer, or UNAVAILABLE if construction or the query failed
    """
    try:
        return factory().connection_status()
    except Exception as e:
        logger.warning(f"Reachability check failed, assuming no network: {e}")
        return ConnectionStatus.UNAVAILABLE
