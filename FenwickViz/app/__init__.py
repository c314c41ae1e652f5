from .Controller import Controller, parse_index, parse_value
from .settings import DEFAULT_SETTINGS, available_settings, make_settings
