"""Base middleware interface and the callable shapes used in a chain.

A middleware takes the delivery, the response so far and the next callable in
the chain, and returns a response. ``next`` takes only the delivery and the
response.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from eb_worker.http import Delivery, Response

Next = Callable[[Delivery, Response], Response]
Handler = Callable[[Delivery, Response, Next], Response]


def pass_through(request: Delivery, response: Response) -> Response:
    """Default terminal continuation: return the response unchanged."""
    return response


class BaseMiddleware(ABC):
    """Abstract base for class-based middleware.

    Plain functions with the same signature work equally well in a chain.
    """

    @abstractmethod
    def __call__(self, request: Delivery, response: Response, next: Next) -> Response:
        """Handle the delivery; call ``next`` to continue the chain."""
        pass
