from . import auth, health, responses, stores

__all__ = ["auth", "health", "responses", "stores"]
