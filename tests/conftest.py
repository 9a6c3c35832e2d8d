"""
Shared fixtures: a four-product catalog (A1/B2/C3/D4), a fake generation
client and payload helpers. No test talks to a real provider.
"""
import asyncio
import json

import pytest

from luxematch.core.config import Settings
from luxematch.domain.models.product import Catalog


PRODUCT_RECORDS = [
    {
        "ProductID": "A1", "ProductName": "Ivory Silk Blouse", "ProductBrand": "Zara",
        "Gender": "Women", "Price": 2499, "NumImages": 5,
        "Description": "Ivory silk blouse with a relaxed fit.", "PrimaryColor": "White",
    },
    {
        "ProductID": "B2", "ProductName": "Black Tailored Trousers", "ProductBrand": "Mango",
        "Gender": "Women", "Price": 1999, "NumImages": 4,
        "Description": "High-rise black trousers, straight leg.", "PrimaryColor": "Black",
    },
    {
        "ProductID": "C3", "ProductName": "Nude Block Heels", "ProductBrand": "Mochi",
        "Gender": "Women", "Price": 1790, "NumImages": 5,
        "Description": "Nude block heels with an ankle strap.", "PrimaryColor": "Beige",
    },
    {
        "ProductID": "D4", "ProductName": "Gold Hoop Earrings", "ProductBrand": "Accessorize",
        "Gender": "Women", "Price": 899, "NumImages": 3,
        "Description": "Lightweight gold-toned hoops.", "PrimaryColor": "Gold",
    },
]


class FakeGenerationClient:
    """Records every call; returns `text`, raises `exc`, or waits on `gate` first."""

    name = "fake"

    def __init__(self, text=None, exc=None, delay=0.0, gate=None):
        self.text = text
        self.exc = exc
        self.delay = delay
        self.gate = gate
        self.calls = []

    async def generate(self, *, system, task, schema):
        self.calls.append({"system": system, "task": task, "schema": schema})
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.exc is not None:
            raise self.exc
        return self.text


def payload(**overrides) -> dict:
    data = {
        "top_id": "A1",
        "bottom_id": "B2",
        "footwear_id": "C3",
        "accessory_id": "D4",
        "style_tags": ["chic", "minimal"],
        "color_palette": ["#FFFFF0", "black", "gold"],
        "reasoning": "Clean lines and a neutral palette keep it polished.",
        "occasion_title": "Gallery Opening Chic",
    }
    data.update(overrides)
    return data


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_records(PRODUCT_RECORDS)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def make_client():
    def _make(text=None, exc=None, delay=0.0, gate=None):
        return FakeGenerationClient(text=text, exc=exc, delay=delay, gate=gate)
    return _make


@pytest.fixture
def make_payload():
    def _make(**overrides) -> str:
        return json.dumps(payload(**overrides))
    return _make
