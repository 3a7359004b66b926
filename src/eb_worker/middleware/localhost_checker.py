"""Reject deliveries that do not come from the local queue daemon.

The daemon runs on the same instance as the application, so anything reaching
worker routes from elsewhere is refused with a 403.
"""

import ipaddress
import logging

from eb_worker.http import Delivery, Response
from eb_worker.middleware.base import BaseMiddleware, Next

logger = logging.getLogger(__name__)


def is_localhost(host: str | None) -> bool:
    """Return True for loopback addresses and the ``localhost`` name."""
    if not host:
        return False
    if host == "localhost":
        return True
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    # ::ffff:127.0.0.1 is not loopback on older interpreters
    address = getattr(address, "ipv4_mapped", None) or address
    return address.is_loopback


class LocalhostCheckerMiddleware(BaseMiddleware):
    """Forward only deliveries whose client host is a loopback address."""

    def __call__(self, request: Delivery, response: Response, next: Next) -> Response:
        if not is_localhost(request.client_host):
            logger.warning("Refused worker request from %s", request.client_host)
            return response.with_status(403)
        return next(request, response)
