"""Building the call chain from an ordered list of handlers."""

from collections.abc import Sequence

from eb_worker.middleware.base import Handler, Next


def _bind(handler: Handler, next_: Next) -> Next:
    def call(request, response):
        return handler(request, response, next_)

    return call


def build_chain(handlers: Sequence[Handler], out: Next) -> Next:
    """Right-fold ``handlers`` into a single callable ending in ``out``.

    The first handler is outermost; the last one's ``next`` is ``out``. An empty
    list yields ``out`` itself.
    """
    chain = out
    for handler in reversed(handlers):
        chain = _bind(handler, chain)
    return chain
