from luxematch.domain.models.outfit import AIRecommendation, OutfitSelection, RawRecommendation


def assemble_recommendation(outfit: OutfitSelection, raw: RawRecommendation) -> AIRecommendation:
    """Attach the stylist's tags, palette, note and title to the resolved slots."""
    return AIRecommendation(
        outfit=outfit,
        style_tags=list(raw.style_tags),
        color_palette=list(raw.color_palette),
        reasoning=raw.reasoning,
        occasion=raw.occasion_title,
    )
