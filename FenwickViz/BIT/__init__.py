from .errors import FenwickError, IndexOutOfRange, InvalidIndexFormat, InvalidLength, InvalidValueFormat
from .FenwickEngine import FenwickEngine, QueryResult, Touched
from .utils import covered_range, lowbit, query_path, trailing_zeros, update_path
