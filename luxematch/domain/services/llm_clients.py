# luxematch/domain/services/llm_clients.py

from __future__ import annotations
from typing import Any, Dict, Optional, Protocol
import copy
import logging
from time import monotonic as _now

from openai import AsyncOpenAI

from luxematch.core.config import Settings
from luxematch.domain.models.outfit import RawRecommendation

logger = logging.getLogger(__name__)

SCHEMA_NAME = "outfit_recommendation"

# =============================================================================
#                               OUTPUT SCHEMAS
# =============================================================================

def output_json_schema() -> Dict[str, Any]:
    """
    JSON Schema of the stylist answer, derived from RawRecommendation.
    Every field is required and nothing else is allowed (strict mode).
    """
    schema = RawRecommendation.model_json_schema()
    schema.pop("description", None)
    schema["required"] = list(schema["properties"].keys())
    schema["additionalProperties"] = False
    return schema

_GEMINI_SCHEMA_KEYS = {"type", "properties", "items", "required", "description", "enum"}

def _to_gemini_schema(node: Any) -> Any:
    # Gemini accepts an OpenAPI subset: upper-case types, no titles/additionalProperties
    if isinstance(node, dict):
        out = {}
        for k, v in node.items():
            if k not in _GEMINI_SCHEMA_KEYS:
                continue
            if k == "type":
                out[k] = str(v).upper()
            elif k == "properties":
                out[k] = {name: _to_gemini_schema(sub) for name, sub in v.items()}
            elif k == "items":
                out[k] = _to_gemini_schema(v)
            else:
                out[k] = copy.deepcopy(v)
        return out
    return node

def gemini_response_schema() -> Dict[str, Any]:
    return _to_gemini_schema(output_json_schema())

# =============================================================================
#                               CLIENTS
# =============================================================================

class GenerationClient(Protocol):
    """Anything that turns (system, task, schema) into schema-constrained text."""

    name: str

    async def generate(self, *, system: str, task: str, schema: Dict[str, Any]) -> Optional[str]:
        ...


class OpenAIStylistClient:
    """Chat Completions with a strict json_schema response format."""

    name = "openai"

    def __init__(self, settings: Settings):
        self.settings = settings

    async def generate(self, *, system: str, task: str, schema: Dict[str, Any]) -> Optional[str]:
        settings = self.settings
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, max_retries=0)  # no automatic retries
        model = settings.OPENAI_STYLIST_MODEL
        t0 = _now()
        resp = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": task},
            ],
            max_tokens=settings.stylist_max_tokens,
            temperature=settings.stylist_temperature,
            timeout=settings.openai_timeout_s,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": SCHEMA_NAME, "strict": True, "schema": schema},
            },
        )
        dt = _now() - t0
        # Best-effort usage logging
        u = getattr(resp, "usage", None)
        logger.info(
            f"LLM call provider=openai model={getattr(resp, 'model', model)} duration={dt:.3f}s "
            f"tokens(prompt={getattr(u, 'prompt_tokens', None)}, "
            f"completion={getattr(u, 'completion_tokens', None)}, total={getattr(u, 'total_tokens', None)})"
        )
        if not resp.choices:
            return None
        return resp.choices[0].message.content


class GeminiStylistClient:
    """Gemini JSON mode with a response schema."""

    name = "gemini"

    def __init__(self, settings: Settings):
        self.settings = settings

    async def generate(self, *, system: str, task: str, schema: Dict[str, Any]) -> Optional[str]:
        import google.generativeai as genai

        settings = self.settings
        genai.configure(api_key=settings.GEMINI_API_KEY)
        model = genai.GenerativeModel(
            model_name=settings.GEMINI_STYLIST_MODEL,
            system_instruction=system,
            generation_config={
                "temperature": settings.stylist_temperature,
                "max_output_tokens": settings.stylist_max_tokens,
                "response_mime_type": "application/json",
                "response_schema": _to_gemini_schema(schema),
            },
        )
        t0 = _now()
        response = await model.generate_content_async(
            task, request_options={"timeout": settings.gemini_timeout_s}
        )
        dt = _now() - t0
        logger.info(f"LLM call provider=gemini model={settings.GEMINI_STYLIST_MODEL} duration={dt:.3f}s")
        # .text raises when the candidate was blocked or carries no parts
        if not response.candidates:
            return None
        return response.text


def get_generation_client(settings: Settings) -> GenerationClient:
    if settings.LLM_PROVIDER == "gemini":
        return GeminiStylistClient(settings)
    return OpenAIStylistClient(settings)


def provider_key_configured(settings: Settings) -> bool:
    if settings.LLM_PROVIDER == "gemini":
        return bool(settings.GEMINI_API_KEY)
    return bool(settings.OPENAI_API_KEY)


def provider_timeout_s(settings: Settings) -> float:
    """Longest a single provider call may take."""
    if settings.LLM_PROVIDER == "gemini":
        return settings.gemini_timeout_s
    return settings.openai_timeout_s
