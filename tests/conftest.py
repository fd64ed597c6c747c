from types import SimpleNamespace

import pytest

from place_guide.api import llm
from place_guide.api.models import (
    DetailedLocation,
    ErrorInfo,
    LocationData,
    LocationInfo,
    LocationInfoResult,
    NearbyLocation,
    NearbyLocationsResult,
)


@pytest.fixture(autouse=True)
def ai_env(monkeypatch):
    monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-test")
    monkeypatch.delenv("PROMPTS_DIR", raising=False)
    monkeypatch.delenv("NEARBY_RADIUS", raising=False)
    monkeypatch.delenv("NEARBY_INTERESTS", raising=False)


@pytest.fixture
def paris():
    return LocationData(lat=48.886705, lng=2.343104, city="Paris", locality="Montmartre")


@pytest.fixture
def berlin():
    return LocationData(lat=52.520008, lng=13.404954, city="Berlin", locality="Mitte")


@pytest.fixture
def detailed_paris():
    return DetailedLocation(
        name="Montmartre, Paris",
        city="Paris",
        sublocality="Montmartre",
        latitude=48.886705,
        longitude=2.343104,
    )


class StubFetcher:
    """Async collaborator stub returning queued outcomes and recording calls."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def __call__(self, location):
        self.calls.append(location)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def info_ok(name="Montmartre, Paris", description="Hilltop district."):
    return LocationInfoResult(success=True, data=LocationInfo(name=name, description=description))


def info_failed(message="Failed to get location information. Please try again.", code="API_ERROR"):
    return LocationInfoResult(success=False, error=ErrorInfo(message=message, code=code))


def nearby_ok(*names):
    names = names or ("Sacré-Cœur",)
    return NearbyLocationsResult(
        success=True,
        data=[
            NearbyLocation(
                name=name,
                description=f"{name} description",
                category="landmark",
                why_interesting="Worth a look",
            )
            for name in names
        ],
    )


def nearby_failed(message="Failed to find nearby locations. Please try again.", code="API_ERROR"):
    return NearbyLocationsResult(success=False, error=ErrorInfo(message=message, code=code))


class FakeCompletions:
    """Chat-completions stub returning queued reply texts or raising queued errors."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=outcome))]
        )


class FakeClient:
    def __init__(self, completions):
        self.chat = SimpleNamespace(completions=completions)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def completions(monkeypatch):
    fake = FakeCompletions([])
    monkeypatch.setattr(llm, "_create_client", lambda: FakeClient(fake))
    return fake
