from .config import ServiceSettings, get_settings, load_settings

__all__ = [
    "ServiceSettings",
    "get_settings",
    "load_settings",
]
