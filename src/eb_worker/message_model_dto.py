"""Shape of the JSON body the queue daemon delivers.

Only the two top-level fields are read; anything else in the body is ignored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessageDTO(BaseModel):
    """A delivered message: its name and an arbitrary JSON payload."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Message name, used to look up mapped middleware")
    payload: Any = Field(..., description="Application payload (any JSON value)")
