"""HTTP boundary: request validation and response shaping around the token core."""
from .routes import router

__all__ = ["router"]
