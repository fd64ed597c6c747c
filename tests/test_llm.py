import asyncio

import pytest
from pydantic import BaseModel

from place_guide.api import llm
from place_guide.api.models import GenerationOptions, Structured, Text
from place_guide.api.schemas import LocationInfoPayload, NearbyLocationsPayload


class CityReply(BaseModel):
    name: str


def test_process_prompt_template_replaces_every_occurrence():
    template = "{city} is in {country}. Visit {city}!"

    result = llm.process_prompt_template(template, {"city": "Lyon", "country": "France"})

    assert result == "Lyon is in France. Visit Lyon!"


def test_process_prompt_template_leaves_unknown_placeholders():
    assert llm.process_prompt_template("{a} {b}", {"a": "1"}) == "1 {b}"


def test_read_prompt_template_from_packaged_prompts():
    template = llm.read_prompt_template("nearby.txt")

    for placeholder in ("{location}", "{city}", "{sublocality}", "{latitude}",
                        "{longitude}", "{radius}", "{interests}"):
        assert placeholder in template


def test_read_prompt_template_missing_file_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("PROMPTS_DIR", str(tmp_path))

    with pytest.raises(FileNotFoundError):
        llm.read_prompt_template("about.txt")


def test_generate_text_passes_options(completions):
    completions.outcomes.append("  Some prose.  ")

    text = asyncio.run(
        llm.generate_text("prompt", GenerationOptions(model="sonar-pro", temperature=0.7, max_tokens=50))
    )

    assert text == "Some prose."
    call = completions.calls[0]
    assert call["model"] == "sonar-pro"
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 50
    assert call["messages"] == [{"role": "user", "content": "prompt"}]
    assert "response_format" not in call


def test_generate_text_applies_defaults_and_strips_reasoning(completions):
    completions.outcomes.append("<think>pondering</think>\nAnswer.")

    text = asyncio.run(llm.generate_text("p", GenerationOptions(model="sonar-reasoning")))

    assert text == "Answer."
    assert completions.calls[0]["temperature"] == llm.DEFAULT_TEMPERATURE
    assert completions.calls[0]["max_tokens"] == llm.DEFAULT_MAX_TOKENS


def test_generate_text_keeps_zero_temperature(completions):
    completions.outcomes.append("x")

    asyncio.run(llm.generate_text("p", GenerationOptions(model="sonar-pro", temperature=0.0)))

    assert completions.calls[0]["temperature"] == 0.0


def test_generate_object_returns_validated_model(completions):
    completions.outcomes.append('<think>...</think>```json\n{"name": "Lyon"}\n```')

    result = asyncio.run(
        llm.generate_object("p", GenerationOptions(model="sonar-pro", schema=CityReply))
    )

    assert isinstance(result, Structured)
    assert result.data == CityReply(name="Lyon")
    assert completions.calls[0]["response_format"] == {
        "type": "json_schema",
        "json_schema": {"schema": CityReply.model_json_schema()},
    }


@pytest.mark.parametrize(
    "first",
    ["not json", "[1, 2]", '{"summary": "wrong shape"}', '{"name": 3}', RuntimeError("schema rejected")],
)
def test_generate_object_falls_back_to_text(completions, first):
    completions.outcomes.extend([first, "Plain answer"])

    result = asyncio.run(
        llm.generate_object("p", GenerationOptions(model="sonar-pro", schema=CityReply))
    )

    assert result == Text("Plain answer")
    assert len(completions.calls) == 2
    assert "response_format" not in completions.calls[1]


@pytest.mark.parametrize(
    "reply",
    [
        '{"name": "Montmartre"}',
        '{"name": "Montmartre", "description": "   "}',
        '{"summary": "wrong shape"}',
    ],
)
def test_location_info_reply_without_description_falls_back(completions, reply):
    completions.outcomes.extend([reply, "Montmartre is a hill."])

    result = asyncio.run(
        llm.generate_object("p", GenerationOptions(model="sonar-pro", schema=LocationInfoPayload))
    )

    assert result == Text("Montmartre is a hill.")


@pytest.mark.parametrize(
    "reply",
    [
        '{"foo": 1}',
        '{"locations": [{"description": "no name", "category": "x", "whyInteresting": "y"}]}',
        '{"locations": ["junk"]}',
    ],
)
def test_nearby_reply_with_wrong_shape_falls_back(completions, reply):
    completions.outcomes.extend([reply, "Places to see"])

    result = asyncio.run(
        llm.generate_object("p", GenerationOptions(model="sonar-reasoning", schema=NearbyLocationsPayload))
    )

    assert result == Text("Places to see")


def test_generate_object_without_schema_is_text(completions):
    completions.outcomes.append("Plain")

    result = asyncio.run(llm.generate_object("p", GenerationOptions(model="sonar-pro")))

    assert result == Text("Plain")
    assert len(completions.calls) == 1


def test_text_fallback_errors_propagate(completions):
    completions.outcomes.extend([RuntimeError("down"), RuntimeError("still down")])

    with pytest.raises(RuntimeError, match="still down"):
        asyncio.run(llm.generate_object("p", GenerationOptions(model="sonar-pro", schema=CityReply)))


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.delenv("PERPLEXITY_API_KEY")

    with pytest.raises(ValueError, match="PERPLEXITY_API_KEY"):
        asyncio.run(llm.generate_text("p", GenerationOptions(model="sonar-pro")))
