from lan_chat.repositories.config_repository import ConfigRepository
from lan_chat.repositories.preference_repository import PreferenceRepository

__all__ = [
    "ConfigRepository",
    "PreferenceRepository",
]
