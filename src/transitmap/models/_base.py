"""Base model and coercion helpers for provider resources.

Provider responses follow JSON:API: each resource is an object with an
``id`` and an ``attributes`` mapping. :class:`TransitBaseModel` flattens
that shape before field validation so models can declare plain
snake_case fields, and stashes the original resource in ``raw``.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def flatten_resource(values: Any) -> Any:
    """Merge a JSON:API resource's ``attributes`` into its top level.

    Attributes win over top-level members of the same name (the resource
    ``type`` member collides with a route's ``type`` attribute), except for
    ``id``. Idempotent: a dict without an ``attributes`` mapping is returned
    unchanged.
    """
    if not isinstance(values, dict):
        return values
    attributes = values.get("attributes")
    if not isinstance(attributes, dict):
        return values
    merged = {k: v for k, v in values.items() if k != "attributes"}
    merged.update({k: v for k, v in attributes.items() if k != "id"})
    merged.setdefault("raw", dict(values))
    return merged


class TransitBaseModel(BaseModel):
    """Base for provider resource models.

    Handles:
    * ``{"id": ..., "attributes": {...}}`` flattening
    * Stashing the original resource dict in ``raw``

    Subclasses with their own ``mode="before"`` validators must call
    :func:`flatten_resource` first; before-validators on a subclass run
    ahead of the base class one.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original provider resource."""

    @model_validator(mode="before")
    @classmethod
    def _flatten_attributes(cls, values: Any) -> Any:
        return flatten_resource(values)
