"""Request and response value objects passed through the middleware chain.

Both are frozen and hold their headers and attributes in read-only mappings.
Every ``with_*`` helper returns an updated copy and leaves the original
untouched, so a handler can never change what earlier handlers or the caller see.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _find_header(headers: Mapping[str, str], name: str) -> str | None:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def _read_only(values: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(values))


class Delivery(BaseModel):
    """One message delivered by the queue daemon as an HTTP request."""

    model_config = ConfigDict(frozen=True)

    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True, description="Request headers")
    body: str = Field("", description="Raw UTF-8 request body")
    client_host: str | None = Field(None, description="Remote address of the caller")
    attributes: Mapping[str, Any] = Field(
        default_factory=dict, validate_default=True, description="Values attached by middleware"
    )

    @field_validator("headers", "attributes")
    @classmethod
    def freeze_mapping(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return _read_only(value)

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Return the header value, matching the name case-insensitively."""
        value = _find_header(self.headers, name)
        return default if value is None else value

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> "Delivery":
        """Return a copy with ``name`` set to ``value``."""
        return self.with_attributes({name: value})

    def with_attributes(self, values: Mapping[str, Any]) -> "Delivery":
        """Return a copy with all of ``values`` merged into the attributes."""
        return self.model_copy(update={"attributes": _read_only({**self.attributes, **values})})


class Response(BaseModel):
    """Response seeded into the chain and returned from it."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(200, description="HTTP status code")
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True, description="Response headers")
    body: str = Field("", description="Response body")

    @field_validator("headers")
    @classmethod
    def freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _read_only(value)

    def get_header(self, name: str, default: str | None = None) -> str | None:
        value = _find_header(self.headers, name)
        return default if value is None else value

    def has_header(self, name: str) -> bool:
        return _find_header(self.headers, name) is not None

    def with_header(self, name: str, value: str) -> "Response":
        """Return a copy with the header replaced (case-insensitively)."""
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return self.model_copy(update={"headers": _read_only(headers)})

    def with_status(self, status_code: int) -> "Response":
        return self.model_copy(update={"status_code": status_code})
