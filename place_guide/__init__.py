"""Place guide: location lookup and AI-generated place information."""
