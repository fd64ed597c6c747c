"""Service layer: AI info retrieval and the location cache."""

from .location_info_service import LocationInfoService
from .location_store import LocationStore

__all__ = ['LocationInfoService', 'LocationStore']
