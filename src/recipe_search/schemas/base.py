"""Base schema configuration for all Pydantic models.

This module provides centralized base classes with consistent configuration.

Usage:
    - InboundSchema: For data handed to the aggregator (caller queries,
      records returned by source adapters)
    - OutboundSchema: For observability records the aggregator produces
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        # Providers and callers speak camelCase (readyInMinutes, maxReadyTime)
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
        serialize_by_alias=True,
    )


class InboundSchema(_BaseSchema):
    """Base class for data received by the aggregator.

    Configured to ignore extra fields - providers attach many properties we
    don't use, and that must not break parsing.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class OutboundSchema(_BaseSchema):
    """Base class for records produced by the aggregator.

    Configured to forbid extra fields.
    """

    model_config = ConfigDict(
        extra="forbid",
    )
