"""Worker middleware: route a queue delivery to its mapped middleware.

The queue daemon POSTs each dequeued message to the application. The body is a
JSON object with ``name`` and ``payload``; the message name selects which
middleware run, in order, before the caller's ``out`` continuation.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from eb_worker.chain import build_chain
from eb_worker.exceptions import InvalidMappedMiddlewareError, MissingMiddlewareError
from eb_worker.http import Delivery, Response
from eb_worker.message_model_dto import MessageDTO
from eb_worker.middleware.base import BaseMiddleware, Next, pass_through
from eb_worker.middleware_list import MiddlewareList, decode_middleware_list
from eb_worker.resolver import Resolver

if TYPE_CHECKING:
    from config import Settings

logger = logging.getLogger(__name__)

MATCHED_QUEUE_ATTRIBUTE = "eb_worker.matched_queue"
MESSAGE_ID_ATTRIBUTE = "eb_worker.message_id"
MESSAGE_NAME_ATTRIBUTE = "eb_worker.message_name"
MESSAGE_PAYLOAD_ATTRIBUTE = "eb_worker.message_payload"

DEFAULT_QUEUE_HEADER = "X-Aws-Sqsd-Queue"
DEFAULT_MESSAGE_ID_HEADER = "X-Aws-Sqsd-Msgid"
DEFAULT_CONFIG_KEY = "eb_worker"


def with_dispatch_attributes(
    request: Delivery,
    queue: str | None,
    message_id: str | None,
    name: str,
    payload: Any,
) -> Delivery:
    """Return a copy of ``request`` carrying the four dispatch attributes."""
    return request.with_attributes(
        {
            MATCHED_QUEUE_ATTRIBUTE: queue,
            MESSAGE_ID_ATTRIBUTE: message_id,
            MESSAGE_NAME_ATTRIBUTE: name,
            MESSAGE_PAYLOAD_ATTRIBUTE: payload,
        }
    )


class WorkerMiddleware(BaseMiddleware):
    """Dispatch a delivered message to the middleware mapped to its name.

    ``mapping`` maps message names to a middleware identifier or a list of them.
    Values are only checked when a message with that name is dispatched.
    """

    MATCHED_QUEUE_ATTRIBUTE = MATCHED_QUEUE_ATTRIBUTE
    MESSAGE_ID_ATTRIBUTE = MESSAGE_ID_ATTRIBUTE
    MESSAGE_NAME_ATTRIBUTE = MESSAGE_NAME_ATTRIBUTE
    MESSAGE_PAYLOAD_ATTRIBUTE = MESSAGE_PAYLOAD_ATTRIBUTE

    def __init__(
        self,
        mapping: Mapping[str, Any],
        resolver: Resolver,
        *,
        queue_header: str = DEFAULT_QUEUE_HEADER,
        message_id_header: str = DEFAULT_MESSAGE_ID_HEADER,
        config_key: str = DEFAULT_CONFIG_KEY,
    ) -> None:
        self.mapping = MappingProxyType(dict(mapping))
        self.resolver = resolver
        self.queue_header = queue_header
        self.message_id_header = message_id_header
        self.config_key = config_key

    @classmethod
    def from_settings(cls, mapping: Mapping[str, Any], resolver: Resolver, settings: "Settings") -> "WorkerMiddleware":
        """Build a worker middleware using header names and config key from settings."""
        return cls(
            mapping,
            resolver,
            queue_header=settings.queue_header,
            message_id_header=settings.message_id_header,
            config_key=settings.config_key,
        )

    def __call__(self, request: Delivery, response: Response, next: Next | None = None) -> Response:
        out = next or pass_through
        message = MessageDTO.model_validate_json(request.body)
        middleware_list = self.middleware_for(message.name)

        request = with_dispatch_attributes(
            request,
            request.get_header(self.queue_header),
            request.get_header(self.message_id_header),
            message.name,
            message.payload,
        )
        logger.debug(
            "Dispatching message %s (id %s, queue %s) to %d middleware",
            message.name,
            request.get_attribute(MESSAGE_ID_ATTRIBUTE),
            request.get_attribute(MATCHED_QUEUE_ATTRIBUTE),
            len(middleware_list.identifiers),
        )

        handlers = [self.resolver.resolve(identifier) for identifier in middleware_list.identifiers]
        return build_chain(handlers, out)(request, response)

    def middleware_for(self, message_name: str) -> MiddlewareList:
        """Return the decoded middleware list mapped to ``message_name``."""
        if message_name not in self.mapping:
            logger.warning("No middleware mapped for message %s", message_name)
            raise MissingMiddlewareError(message_name, self.config_key)
        try:
            return decode_middleware_list(self.mapping[message_name])
        except InvalidMappedMiddlewareError:
            logger.warning("Invalid middleware mapped for message %s", message_name)
            raise
