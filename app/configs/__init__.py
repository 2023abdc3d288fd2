from app.configs.settings import (
    CONFIG_MAP,
    LimiterConfig,
    PasswordConfig,
    Settings,
    settings,
)

__all__ = [
    "CONFIG_MAP",
    "LimiterConfig",
    "PasswordConfig",
    "Settings",
    "settings",
]
