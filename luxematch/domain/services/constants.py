# Outfit slots, in rendering order
SLOT_TOP = "top"
SLOT_BOTTOM = "bottom"
SLOT_FOOTWEAR = "footwear"
SLOT_ACCESSORY = "accessory"
SLOTS = (SLOT_TOP, SLOT_BOTTOM, SLOT_FOOTWEAR, SLOT_ACCESSORY)

# RawRecommendation identifier field for each slot
SLOT_ID_FIELDS = {
    SLOT_TOP: "top_id",
    SLOT_BOTTOM: "bottom_id",
    SLOT_FOOTWEAR: "footwear_id",
    SLOT_ACCESSORY: "accessory_id",
}

# Reserved identifier: "deliberately no bottom" (dress/jumpsuit covers it)
NO_ITEM_SENTINEL = "NONE"

# Slots where the sentinel is an accepted answer
SENTINEL_SLOTS = {SLOT_BOTTOM}

# User-facing message for hard failures
STYLISTS_BUSY_MESSAGE = "Our stylists are currently busy (AI Error). Please try again."
