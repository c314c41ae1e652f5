import re

import numpy as np
import pandas as pd

from ..BIT.errors import FenwickError, IndexOutOfRange, InvalidIndexFormat, InvalidValueFormat
from ..BIT.FenwickEngine import FenwickEngine, Touched
from ..BIT.utils import INT64_MAX, INT64_MIN, covered_range, lowbit
from .settings import make_settings


INDEX_PATTERN = re.compile(r'\+?[0-9]+')
VALUE_PATTERN = re.compile(r'[+-]?[0-9]+')
UINT64_MAX = (1 << 64) - 1


def parse_index(text, operation='query'):
    """ Parses a user-typed index as an unsigned 64-bit integer (no spaces or separators). """
    if INDEX_PATTERN.fullmatch(text) is None:
        raise InvalidIndexFormat(text, operation)
    index = int(text)
    if index > UINT64_MAX:
        raise InvalidIndexFormat(text, operation)
    return index


def parse_value(text):
    """ Parses a user-typed update value as a signed 64-bit integer. """
    if VALUE_PATTERN.fullmatch(text) is None:
        raise InvalidValueFormat(text)
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise InvalidValueFormat(text)
    return value


class Controller(object):
    """
    Owns a :class:`FenwickEngine` and translates user commands into engine
    calls.

    The controller keeps the state that only matters for display: the
    highlights returned by the last query or update, the latest error
    message and the raw text inputs. The rendering layer reads everything
    from here and never calls the engine directly.

    :param dict settings: Result of :func:`make_settings`; defaults if None.
    :param bool verbose: Print a trace line for every command.

    .. rubric:: Attributes

    :ivar FenwickEngine engine: The owned engine.
    :ivar Touched touched: Cells highlighted by the last operation.
    :ivar str or None error: Latest error message, cleared on success.
    :ivar dict inputs: Raw text of the ``query``, ``update_index`` and
        ``update_value`` inputs.
    """
    def __init__(self, settings=None, verbose=False):
        self.settings = settings if settings is not None else make_settings()
        self.verbose = verbose
        self.engine = FenwickEngine(self.settings['length'], clear_answer_on_update=self.settings['clear_answer_on_update'])
        self.touched = Touched()
        self.error = None
        self.inputs = {'query': '', 'update_index': '', 'update_value': ''}

    def _log(self, message):
        if self.verbose:
            print(message)

    def _fail(self, err):
        self.error = str(err)
        self._log(f'WARNING: {self.error}')
        return None

    @property
    def length(self):
        return len(self.engine)

    @property
    def array(self):
        return self.engine.array

    @property
    def tree(self):
        return self.engine.tree

    @property
    def array_highlighted(self):
        return self.touched.array_mask(self.length)

    @property
    def tree_highlighted(self):
        return self.touched.tree_mask(self.length)

    @property
    def query_answer(self):
        return self.engine.last_query

    def set_length(self, n):
        """ Clamps *n* to the configured bounds and resizes the engine. """
        n = int(np.clip(n, self.settings['min_length'], self.settings['max_length']))
        if n != self.length:
            self.engine.resize(n)
            self.touched = Touched()
            self.error = None
            self._log(f'resize -> {n}')
        return n

    def query(self, index):
        try:
            result = self.engine.query(index)
        except FenwickError as err:
            return self._fail(err)
        self.touched = result.touched
        self.error = None
        self._log(f'query({index}) = {result.sum} via tree cells {list(result.touched.tree_indices)}')
        return result.sum

    def update(self, index, value):
        try:
            touched = self.engine.update(index, value)
        except (FenwickError, OverflowError) as err:
            return self._fail(err)
        self.touched = touched
        self.error = None
        self._log(f'update({index}, {value}) via tree cells {list(touched.tree_indices)}')
        return touched

    def query_text(self, text=None):
        """ Parses the query input (or *text*) and runs the query. """
        if text is not None:
            self.inputs['query'] = text
        try:
            index = parse_index(self.inputs['query'], 'query')
        except FenwickError as err:
            return self._fail(err)
        return self.query(index)

    def update_text(self, index_text=None, value_text=None):
        """ Parses the update inputs (or the given texts) and runs the update. """
        if index_text is not None:
            self.inputs['update_index'] = index_text
        if value_text is not None:
            self.inputs['update_value'] = value_text
        try:
            index = parse_index(self.inputs['update_index'], 'update')
            # the range is checked before the value is parsed
            if not 1 <= index <= self.length:
                raise IndexOutOfRange(index, self.length, 'update')
            value = parse_value(self.inputs['update_value'])
        except FenwickError as err:
            return self._fail(err)
        return self.update(index, value)

    def randomize(self, value_range=None, rng=None):
        if value_range is None:
            value_range = self.settings['value_range']
        try:
            touched = self.engine.randomize(value_range, rng=rng)
        except (ValueError, OverflowError) as err:
            return self._fail(err)
        self.touched = touched
        self.error = None
        self._log(f'randomize {value_range}')

    def reset(self):
        self.engine.reset()
        self.touched = Touched()
        self.error = None
        for key in self.inputs:
            self.inputs[key] = ''
        self._log('reset')

    def snapshot(self):
        """
        Current state as a ``pandas.DataFrame`` indexed by the 1-based index.

        Columns: ``array``, ``tree``, ``lowbit``, ``range_start``,
        ``array_highlighted``, ``tree_highlighted``.
        """
        idx = pd.RangeIndex(1, self.length + 1, name='index')
        return pd.DataFrame(
            {
                'array': self.array.copy(),
                'tree': self.tree.copy(),
                'lowbit': [lowbit(i) for i in idx],
                'range_start': [covered_range(i)[0] for i in idx],
                'array_highlighted': self.array_highlighted,
                'tree_highlighted': self.tree_highlighted,
            },
            index=idx,
        )

    def plot(self, ax=None, dump=None):
        from .plot import draw

        return draw(self, ax=ax, font_sizes=self.settings['font_sizes'], dump=dump)
