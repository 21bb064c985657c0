"""Casino Mafia backend: game engine, persistence and HTTP API."""

from casino_mafia_backend.settings import BackendSettings, get_settings

__all__ = ["BackendSettings", "get_settings"]
