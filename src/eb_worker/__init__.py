"""Route queue-daemon deliveries to the middleware mapped to each message name."""

from eb_worker.exceptions import (
    InvalidMappedMiddlewareError,
    MappingFileError,
    MissingMiddlewareError,
    UnresolvableMiddlewareError,
    WorkerError,
)
from eb_worker.http import Delivery, Response
from eb_worker.middleware.localhost_checker import LocalhostCheckerMiddleware
from eb_worker.middleware.worker import WorkerMiddleware, with_dispatch_attributes
from eb_worker.resolver import ImportResolver, RegistryResolver, Resolver

__all__ = [
    "Delivery",
    "ImportResolver",
    "InvalidMappedMiddlewareError",
    "LocalhostCheckerMiddleware",
    "MappingFileError",
    "MissingMiddlewareError",
    "RegistryResolver",
    "Resolver",
    "Response",
    "UnresolvableMiddlewareError",
    "WorkerError",
    "WorkerMiddleware",
    "with_dispatch_attributes",
]
