from .BIT import FenwickEngine, QueryResult, Touched, lowbit
from .BIT.errors import FenwickError, IndexOutOfRange, InvalidIndexFormat, InvalidLength, InvalidValueFormat
from .app import Controller, make_settings

__version__ = "0.1.0"
