"""Base class for request payloads."""

from pydantic import ConfigDict

from jobjotter.models.base import CamelModel


class RequestModel(CamelModel):
    """camelCase request body that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


__all__ = ["RequestModel"]
