"""LLM helper functions for the place guide.

Talks to Perplexity Sonar through its OpenAI-compatible Chat Completions
endpoint. Two entry points: ``generate_text`` for prose and
``generate_object`` for replies validated against a pydantic model. The
latter never raises for a bad structured reply; it falls back to a text call
and says so through the ``Structured`` / ``Text`` tag of its return value.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, Optional, Type

from openai import AsyncOpenAI
from pydantic import BaseModel

from place_guide.api.config import (
    get_perplexity_api_key,
    get_perplexity_base_url,
    get_prompts_dir,
)
from place_guide.api.models import Generation, GenerationOptions, Structured, Text

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 1000

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)
_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")

# ---------------------------------------------------------------------------
# Client initialisation
# ---------------------------------------------------------------------------

def _create_client() -> AsyncOpenAI:
    """Build a client per call so it is never shared across event loops."""
    return AsyncOpenAI(
        api_key=get_perplexity_api_key(),
        base_url=get_perplexity_base_url(),
    )

# ---------------------------------------------------------------------------
# Prompt templates
# ---------------------------------------------------------------------------

def read_prompt_template(filename: str) -> str:
    """Read a prompt template (e.g. ``about.txt``) from the prompts directory."""
    path = os.path.join(get_prompts_dir(), filename)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()
    except OSError as exc:
        logger.error("Error reading prompt file %s: %s", filename, exc)
        raise


def process_prompt_template(template: str, replacements: Dict[str, str]) -> str:
    """Replace every literal ``{key}`` placeholder with its value.

    Replacements are applied in order, so a value that itself contains a
    later placeholder gets substituted too.
    """
    processed = template
    for key, value in replacements.items():
        processed = processed.replace(f"{{{key}}}", value)
    return processed

# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def _clean_content(content: Optional[str]) -> str:
    """Drop reasoning-model ``<think>`` blocks and surrounding whitespace."""
    return _THINK_BLOCK.sub("", content or "").strip()


def _parse_reply(content: str, schema: Type[BaseModel]) -> BaseModel:
    """Validate a structured reply; raises ``ValidationError`` on a wrong shape."""
    return schema.model_validate_json(_CODE_FENCE.sub("", _clean_content(content)))


async def _complete(prompt: str, options: GenerationOptions, **extra: Any) -> str:
    temperature = options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
    max_tokens = options.max_tokens or DEFAULT_MAX_TOKENS

    logger.debug(
        "Calling chat completion: model=%s temperature=%s max_tokens=%d",
        options.model,
        temperature,
        max_tokens,
    )

    async with _create_client() as client:
        response = await client.chat.completions.create(
            model=options.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
            **extra,
        )

    return response.choices[0].message.content or ""

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def generate_text(prompt: str, options: GenerationOptions) -> str:
    """Return the generated prose for ``prompt``."""
    return _clean_content(await _complete(prompt, options))


async def generate_object(prompt: str, options: GenerationOptions) -> Generation:
    """Ask for a reply matching ``options.schema``.

    Returns ``Structured`` when the reply validates against the schema model,
    otherwise repeats the request as plain text and returns ``Text``. Errors
    from the text call propagate.
    """
    if options.schema is not None:
        response_format = {
            "type": "json_schema",
            "json_schema": {"schema": options.schema.model_json_schema()},
        }
        try:
            content = await _complete(prompt, options, response_format=response_format)
            return Structured(_parse_reply(content, options.schema))
        except Exception as exc:
            logger.warning("Structured generation failed, falling back to text: %s", exc)

    return Text(await generate_text(prompt, options))


__all__ = [
    "generate_text",
    "generate_object",
    "read_prompt_template",
    "process_prompt_template",
]
