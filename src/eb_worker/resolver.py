"""Resolvers turn a middleware identifier into a callable handler.

The worker middleware only depends on ``Resolver.resolve``; any registry or
container can sit behind it.
"""

import importlib
import inspect
import logging
import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from eb_worker.exceptions import UnresolvableMiddlewareError
from eb_worker.middleware.base import Handler

logger = logging.getLogger(__name__)


class Resolver(ABC):
    """Abstract lookup service for mapped middleware."""

    @abstractmethod
    def resolve(self, identifier: str) -> Handler:
        """Return the handler for ``identifier``; raise if it cannot be found."""
        pass


class RegistryResolver(Resolver):
    """Resolve identifiers from a fixed dictionary of handlers."""

    def __init__(self, handlers: Mapping[str, Handler]) -> None:
        self.handlers = dict(handlers)

    def resolve(self, identifier: str) -> Handler:
        try:
            return self.handlers[identifier]
        except KeyError:
            raise UnresolvableMiddlewareError(identifier, "not registered") from None


class ImportResolver(Resolver):
    """Resolve identifiers by importing them.

    Identifiers are either ``package.module:attr`` or ``package.module.attr``.
    Classes are instantiated without arguments; any other callable is returned
    as-is. Directories in ``search_paths`` are appended to ``sys.path`` first.
    """

    def __init__(self, search_paths: Iterable[str] = ()) -> None:
        self.search_paths = list(search_paths)
        for path in self.search_paths:
            if os.path.exists(path) and path not in sys.path:
                sys.path.append(path)

    def resolve(self, identifier: str) -> Handler:
        module_name, attr = self._split(identifier)
        try:
            module = importlib.import_module(module_name)
        except ImportError as err:
            raise UnresolvableMiddlewareError(identifier, f"cannot import {module_name}") from err
        try:
            target = getattr(module, attr)
        except AttributeError as err:
            raise UnresolvableMiddlewareError(identifier, f"{module_name} has no attribute {attr}") from err

        handler = target() if inspect.isclass(target) else target
        if not callable(handler):
            raise UnresolvableMiddlewareError(identifier, "resolved object is not callable")
        logger.debug("Resolved middleware %s to %r", identifier, handler)
        return handler

    @staticmethod
    def _split(identifier: str) -> tuple[str, str]:
        if ":" in identifier:
            module_name, _, attr = identifier.partition(":")
        else:
            module_name, _, attr = identifier.rpartition(".")
        if not module_name or not attr:
            raise UnresolvableMiddlewareError(identifier, "expected 'module:attr' or 'module.attr'")
        return module_name, attr
