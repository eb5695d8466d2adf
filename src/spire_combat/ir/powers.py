"""Power card definitions -- standing passives attached for one combat."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .passives import PassiveEffect


class PowerCardDefinition(BaseModel):
    """The passive half of a Power card, keyed by the card's ``base_id``."""

    id: str
    name: str
    description: str
    effects: list[PassiveEffect] = Field(default_factory=list)
