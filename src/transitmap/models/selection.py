"""Selection and generation-tagged result models."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

from transitmap.models.mode import TransitMode

T = TypeVar("T")


class Selection(BaseModel):
    """Current user selection.

    ``route_id`` is only meaningful while ``mode`` is set; a selection
    without a mode never carries a route.
    """

    model_config = ConfigDict(frozen=True)

    mode: TransitMode | None = None
    route_id: str | None = None

    @model_validator(mode="after")
    def _route_requires_mode(self) -> Selection:
        if self.mode is None and self.route_id is not None:
            raise ValueError("route_id requires a mode")
        return self

    @property
    def is_complete(self) -> bool:
        return self.mode is not None and self.route_id is not None

    def with_mode(self, mode: TransitMode | None) -> Selection:
        """Return a selection for *mode* with the route cleared."""
        return Selection(mode=mode, route_id=None)

    def with_route(self, route_id: str | None) -> Selection:
        return Selection(mode=self.mode, route_id=route_id or None)


@dataclass(frozen=True, slots=True)
class Tagged(Generic[T]):
    """Fetch result stamped with the generation it was issued under."""

    generation: int
    mode: TransitMode
    route_id: str
    items: tuple[T, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, generation: int, mode: TransitMode, route_id: str, items: Sequence[T]) -> Tagged[T]:
        return cls(generation=generation, mode=mode, route_id=route_id, items=tuple(items))
