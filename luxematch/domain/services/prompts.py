from luxematch.domain.services.constants import NO_ITEM_SENTINEL

def system_prompt() -> str:
    return "You are LuxeMatch, an elite high-fashion AI stylist. Return strict JSON only."

def stylist_task(query: str, inventory: str) -> str:
    return (
        f'The user needs an outfit for: "{query}".\n\n'
        "Select the best matching items from the provided INVENTORY list below to create a "
        "complete, stylish outfit.\n"
        "You MUST pick exactly one 'top' (shirt/t-shirt/kurta/dress), one 'bottom' "
        "(jeans/trousers/skirt/shorts/leggings), one 'footwear', and one 'accessory' "
        "(watch/bag/jewellery/belt) from the inventory.\n"
        "If the selected top is a dress or jumpsuit (which covers both top and bottom), set "
        f"'bottom_id' to \"{NO_ITEM_SENTINEL}\" or select a complementary legging if appropriate.\n\n"
        "RULES:\n"
        "- Use ONLY product IDs that appear in INVENTORY, copied exactly\n"
        "- style_tags: 3-5 short keywords\n"
        "- color_palette: 3-5 hex codes or color names taken from the outfit\n"
        "- reasoning: 2-3 sentences on why the outfit suits the occasion\n"
        "- Format: strict JSON, no markdown code blocks\n\n"
        "INVENTORY:\n"
        f"{inventory}"
    )
