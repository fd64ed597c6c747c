# place_guide/api/config.py
"""Configuration management for the place guide API."""
import os
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_INTERESTS = "tourist attractions,restaurants,museums,parks,historical sites"


def get_perplexity_api_key():
    """Get Perplexity API key from environment."""
    api_key = os.getenv("PERPLEXITY_API_KEY")
    if not api_key:
        raise ValueError("PERPLEXITY_API_KEY not set")
    return api_key


def get_perplexity_base_url():
    """Get the OpenAI-compatible Perplexity endpoint."""
    return os.getenv("PERPLEXITY_BASE_URL", "https://api.perplexity.ai")


def get_google_maps_api_key():
    """Get the Google Maps key; empty when unset."""
    return os.getenv("GOOGLE_MAPS_API_KEY", "")


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": get_google_maps_api_key(),
        "language": os.getenv("GOOGLE_MAPS_LANGUAGE", "en"),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


def get_ai_config():
    """Get generation settings for the About and Nearby requests."""
    return {
        "about": {
            "model": os.getenv("ABOUT_MODEL", "sonar-pro"),
            "temperature": float(os.getenv("ABOUT_TEMPERATURE", "0.3")),
            "max_tokens": int(os.getenv("ABOUT_MAX_TOKENS", "1000")),
        },
        "nearby": {
            "model": os.getenv("NEARBY_MODEL", "sonar-reasoning"),
            "temperature": float(os.getenv("NEARBY_TEMPERATURE", "0.4")),
            "max_tokens": int(os.getenv("NEARBY_MAX_TOKENS", "1200")),
        },
    }


def get_nearby_defaults():
    """Get the default search radius and interest categories."""
    interests = os.getenv("NEARBY_INTERESTS", DEFAULT_INTERESTS)
    return {
        "radius": os.getenv("NEARBY_RADIUS", "10 km"),
        "interests": [item.strip() for item in interests.split(",") if item.strip()],
    }


def get_prompts_dir():
    """Directory holding the prompt templates (about.txt, nearby.txt)."""
    return os.getenv("PROMPTS_DIR", os.path.join(PACKAGE_DIR, "prompts"))
