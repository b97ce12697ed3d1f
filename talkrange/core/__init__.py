from .config import Config, Settings, WeightConfig, load_settings
from .exceptions import TalkRangeError, ConfigurationError, ValidationError
from .utility import value_of_action, rank_by_value

__all__ = [
    "Config",
    "Settings",
    "WeightConfig",
    "load_settings",
    "TalkRangeError",
    "ConfigurationError",
    "ValidationError",
    "value_of_action",
    "rank_by_value",
]
