from __future__ import annotations
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from luxematch.domain.models.product import Product
from luxematch.domain.services.constants import NO_ITEM_SENTINEL

# =============================================================================
#                       RAW MODEL OUTPUT (declarative contract)
# =============================================================================

# The stylist model's answer, before identifiers are resolved. Single description
# of the output contract: the provider schema is derived from it and the validator
# parses with it. Strict types: `style_tags: "chic"` or a numeric `top_id` are
# rejected, not coerced. No docstring, it would end up in the provider schema.
class RawRecommendation(BaseModel):
    top_id: StrictStr = Field(..., description="ProductID of the selected top/dress")
    bottom_id: StrictStr = Field(..., description="ProductID of the selected bottom (or 'NONE')")
    footwear_id: StrictStr = Field(..., description="ProductID of the selected footwear")
    accessory_id: StrictStr = Field(..., description="ProductID of the selected accessory")
    style_tags: List[StrictStr] = Field(..., description="Short style keywords for the look")
    color_palette: List[StrictStr] = Field(..., description="Hex codes or color names")
    reasoning: StrictStr = Field(..., description="Why this outfit works for the occasion")
    occasion_title: StrictStr = Field(..., description="A catchy title for this look")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("top_id", "bottom_id", "footwear_id", "accessory_id")
    @classmethod
    def _normalize_identifier(cls, v: str) -> str:
        v = v.strip()
        # any casing of the sentinel means "no item"
        if v.upper() == NO_ITEM_SENTINEL:
            return NO_ITEM_SENTINEL
        return v

# =============================================================================
#                               RESOLVED SLOTS
# =============================================================================

class Resolved(BaseModel):
    status: Literal["resolved"] = "resolved"
    product: Product
    model_config = ConfigDict(frozen=True)

class NoneSelected(BaseModel):
    """The model deliberately left the slot empty (dress/jumpsuit case)."""
    status: Literal["none_selected"] = "none_selected"
    model_config = ConfigDict(frozen=True)

class Unresolved(BaseModel):
    """The model's identifier matched no catalog entry."""
    status: Literal["unresolved"] = "unresolved"
    requested_id: str
    model_config = ConfigDict(frozen=True)

SlotResolution = Annotated[Union[Resolved, NoneSelected, Unresolved], Field(discriminator="status")]


class OutfitSelection(BaseModel):
    top: SlotResolution
    bottom: SlotResolution
    footwear: SlotResolution
    accessory: SlotResolution

    model_config = ConfigDict(frozen=True)

    def product(self, slot: str) -> Optional[Product]:
        """Product in `slot`, or None when the slot is absent."""
        res = getattr(self, slot)
        return res.product if isinstance(res, Resolved) else None

    def is_absent(self, slot: str) -> bool:
        return not isinstance(getattr(self, slot), Resolved)


class AIRecommendation(BaseModel):
    outfit: OutfitSelection
    style_tags: List[str]
    color_palette: List[str]
    reasoning: str
    occasion: str

    model_config = ConfigDict(frozen=True)
