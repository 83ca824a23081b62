from .loader import find_config_path, load_config, save_config
from .models import (
    AISettings,
    LLMSettings,
    QuickChoiceConfig,
)

__all__ = [
    "AISettings",
    "LLMSettings",
    "QuickChoiceConfig",
    "find_config_path",
    "load_config",
    "save_config",
]
