# place_guide/routes/__init__.py
from place_guide.routes.location import create_location_blueprint

__all__ = ["create_location_blueprint"]
