"""Mapped middleware values and how they are decoded.

A message name maps to either one middleware identifier or an ordered list of
them. Raw configuration values are decoded into ``Single`` or ``Many`` so the
rest of the code only ever deals with an ordered tuple of identifiers.
"""

import json
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from eb_worker.exceptions import InvalidMappedMiddlewareError, MappingFileError


class Single(BaseModel):
    """Exactly one middleware identifier."""

    model_config = ConfigDict(frozen=True)

    identifier: str

    @property
    def identifiers(self) -> tuple[str, ...]:
        return (self.identifier,)


class Many(BaseModel):
    """An ordered, possibly empty, list of middleware identifiers."""

    model_config = ConfigDict(frozen=True)

    items: tuple[str, ...] = ()

    @property
    def identifiers(self) -> tuple[str, ...]:
        return self.items


MiddlewareList = Single | Many


def decode_middleware_list(value: Any, message_name: str | None = None) -> MiddlewareList:
    """Decode a raw mapped value.

    Strings become ``Single``, lists and tuples of strings become ``Many``.
    Anything else raises InvalidMappedMiddlewareError naming the offending type.
    """
    if isinstance(value, (Single, Many)):
        return value
    if isinstance(value, str):
        return Single(identifier=value)
    if isinstance(value, (list, tuple)):
        for item in value:
            if not isinstance(item, str):
                raise InvalidMappedMiddlewareError(
                    f"{type(value).__name__} containing {type(item).__name__}",
                    message_name,
                )
        return Many(items=tuple(value))
    raise InvalidMappedMiddlewareError(type(value).__name__, message_name)


def load_message_mapping(path: str | os.PathLike, config_key: str = "eb_worker") -> dict[str, MiddlewareList]:
    """Read a JSON mapping file and decode every entry up front.

    The file holds either the mapping itself, or the mapping nested under
    ``config_key`` (optionally under a further ``messages`` key).
    """
    with open(path, encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as err:
            raise MappingFileError(str(path), f"invalid JSON ({err})") from err

    if isinstance(data, Mapping) and config_key in data:
        data = data[config_key]
        if isinstance(data, Mapping) and "messages" in data:
            data = data["messages"]
    if not isinstance(data, Mapping):
        raise MappingFileError(str(path), f"expected an object, {type(data).__name__} given")

    return {name: decode_middleware_list(value, name) for name, value in data.items()}
