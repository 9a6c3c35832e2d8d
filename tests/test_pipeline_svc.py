"""
End-to-end tests for resolve_outfit with a fake generation client.
"""
import pytest

from luxematch.domain.errors import EmptyQuery, MalformedResponse, RecommendationUnavailable
from luxematch.domain.models.outfit import AIRecommendation, NoneSelected, Unresolved
from luxematch.domain.models.product import Catalog
from luxematch.domain.services.constants import SLOTS
from luxematch.domain.services.pipeline_svc import resolve_outfit


class TestResolveOutfit:

    async def test_dress_example(self, catalog, settings, make_client, make_payload):
        client = make_client(text=make_payload(
            top_id="A1", bottom_id="NONE", footwear_id="C3", accessory_id="D4",
            style_tags=["chic"], color_palette=["black"], reasoning="x", occasion_title="Y",
        ))
        rec = await resolve_outfit("evening gala", catalog=catalog, client=client, settings=settings)

        assert isinstance(rec, AIRecommendation)
        assert rec.outfit.product("top").product_id == "A1"
        assert rec.outfit.is_absent("bottom")
        assert isinstance(rec.outfit.bottom, NoneSelected)
        assert rec.outfit.product("footwear").product_id == "C3"
        assert rec.outfit.product("accessory").product_id == "D4"
        assert rec.style_tags == ["chic"]
        assert rec.color_palette == ["black"]
        assert rec.reasoning == "x"
        assert rec.occasion == "Y"

    async def test_query_is_sent_trimmed(self, catalog, settings, make_client, make_payload):
        client = make_client(text=make_payload())
        await resolve_outfit("  office party  ", catalog=catalog, client=client, settings=settings)
        assert '"office party"' in client.calls[0]["task"]

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    async def test_blank_query_makes_no_call(self, catalog, settings, make_client, make_payload, query):
        client = make_client(text=make_payload())
        with pytest.raises(EmptyQuery):
            await resolve_outfit(query, catalog=catalog, client=client, settings=settings)
        assert client.calls == []

    async def test_malformed_response(self, catalog, settings, make_client, make_payload):
        client = make_client(text=make_payload(style_tags="chic"))
        with pytest.raises(MalformedResponse):
            await resolve_outfit("brunch", catalog=catalog, client=client, settings=settings)

    async def test_provider_failure(self, catalog, settings, make_client):
        client = make_client(exc=RuntimeError("429 rate limited"))
        with pytest.raises(RecommendationUnavailable):
            await resolve_outfit("brunch", catalog=catalog, client=client, settings=settings)

    async def test_empty_catalog(self, settings, make_client, make_payload):
        client = make_client(text=make_payload())
        with pytest.raises(RecommendationUnavailable):
            await resolve_outfit("brunch", catalog=Catalog([]), client=client, settings=settings)
        assert client.calls == []

    async def test_bad_top_keeps_other_slots(self, catalog, settings, make_client, make_payload):
        client = make_client(text=make_payload(top_id="TOP-404"))
        rec = await resolve_outfit("brunch", catalog=catalog, client=client, settings=settings)
        assert isinstance(rec.outfit.top, Unresolved)
        assert [rec.outfit.product(s).product_id for s in SLOTS[1:]] == ["B2", "C3", "D4"]

    async def test_nothing_found_still_assembles(self, catalog, settings, make_client, make_payload):
        client = make_client(text=make_payload(
            top_id="q", bottom_id="none", footwear_id="r", accessory_id="s",
            reasoning="Nothing in stock fits a ski trip.", occasion_title="Ski Weekend",
        ))
        rec = await resolve_outfit("ski trip", catalog=catalog, client=client, settings=settings)
        assert all(rec.outfit.is_absent(s) for s in SLOTS)
        assert rec.reasoning == "Nothing in stock fits a ski trip."
        assert rec.occasion == "Ski Weekend"
        assert rec.style_tags and rec.color_palette
