from dataclasses import dataclass, field

import numpy as np

from .errors import IndexOutOfRange, InvalidLength, InvalidValueFormat
from .utils import INT64_MAX, INT64_MIN, lowbit


@dataclass(frozen=True)
class Touched:
    """
    Cells that took part in the most recent query or update.

    Indices are 1-based. The record is returned by the engine instead of
    being kept on it, so the caller decides how long highlights stay visible.
    """

    array_indices: tuple = ()
    tree_indices: tuple = ()

    def array_mask(self, n):
        mask = np.zeros(n, dtype=bool)
        for i in self.array_indices:
            mask[i - 1] = True
        return mask

    def tree_mask(self, n):
        mask = np.zeros(n, dtype=bool)
        for i in self.tree_indices:
            mask[i - 1] = True
        return mask


@dataclass(frozen=True)
class QueryResult:
    sum: int
    touched: Touched = field(default_factory=Touched)


class FenwickEngine(object):
    """
    A binary indexed tree over an array of signed integers, kept alongside
    the array itself so that both can be displayed.

    Indices are 1-based: position ``i`` of :attr:`array` and :attr:`tree`
    is stored at offset ``i - 1``. ``Tree[i]`` holds the sum of
    ``Array[i - lowbit(i) + 1 .. i]``.

    :param int n: Number of array slots, at least 1.
    :param bool clear_answer_on_update: If True, an update forgets the last
        prefix-sum answer. By default the answer is kept, possibly stale.

    Every public operation either applies fully or raises without mutating
    anything.
    """
    def __init__(self, n, clear_answer_on_update=False):
        self._check_length(n)
        self.clear_answer_on_update = clear_answer_on_update
        self._n = int(n)
        self._a = np.zeros(self._n, dtype=np.int64)
        self._v = np.zeros(self._n, dtype=np.int64)
        self.last_query = None

    @staticmethod
    def _check_length(n):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise InvalidLength(n)

    def _check_index(self, index, operation):
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise IndexOutOfRange(index, self._n, operation)
        if index < 1 or index > self._n:
            raise IndexOutOfRange(index, self._n, operation)
        return int(index)

    def __len__(self):
        return self._n

    @property
    def array(self):
        """ Read-only view of the array values (offset ``i - 1`` is index ``i``). """
        view = self._a.view()
        view.flags.writeable = False
        return view

    @property
    def tree(self):
        """ Read-only view of the tree values (offset ``i - 1`` is index ``i``). """
        view = self._v.view()
        view.flags.writeable = False
        return view

    def resize(self, n):
        """ Rebuilds a zero-filled structure of length *n*; no-op if unchanged. """
        self._check_length(n)
        if n == self._n:
            return
        self._n = int(n)
        self._a = np.zeros(self._n, dtype=np.int64)
        self._v = np.zeros(self._n, dtype=np.int64)
        self.last_query = None

    def query(self, index):
        """
        Prefix sum of ``Array[1..index]``.

        Descends from ``index`` by repeatedly removing the lowest set bit,
        accumulating the visited tree cells. The answer is also stored in
        :attr:`last_query`.

        :raises IndexOutOfRange: If ``index`` is not in ``1..N``.
        """
        index = i = self._check_index(index, 'query')
        _sum = 0
        visited = []
        while i > 0:
            _sum += int(self._v[i - 1])
            visited.append(i)
            i -= lowbit(i)
        self.last_query = _sum
        touched = Touched(array_indices=tuple(range(1, index + 1)), tree_indices=tuple(visited))
        return QueryResult(_sum, touched)

    def update(self, index, value):
        """
        Sets ``Array[index]`` to *value* and propagates the difference up
        the tree, adding it to every cell whose range covers ``index``.

        :raises IndexOutOfRange: If ``index`` is not in ``1..N``.
        :raises InvalidValueFormat: If ``value`` is not an integer.
        :raises OverflowError: If a value or tree sum leaves the int64 range.
        """
        index = i = self._check_index(index, 'update')
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidValueFormat(value)
        value = int(value)
        if value < INT64_MIN or value > INT64_MAX:
            raise OverflowError(f"Value {value} does not fit in 64 bits")

        diff = value - int(self._a[i - 1])
        # compute every new cell first so an overflow leaves nothing applied
        pending = []
        while i <= self._n:
            new = int(self._v[i - 1]) + diff
            if new < INT64_MIN or new > INT64_MAX:
                raise OverflowError(f"Tree cell {i} would overflow 64 bits")
            pending.append((i, new))
            i += lowbit(i)

        self._a[index - 1] = value
        for j, new in pending:
            self._v[j - 1] = new
        if self.clear_answer_on_update:
            self.last_query = None
        return Touched(array_indices=(index,), tree_indices=tuple(j for j, _ in pending))

    def reset(self):
        """ Zeroes the array and the tree and forgets the last answer. """
        self._a[:] = 0
        self._v[:] = 0
        self.last_query = None

    def randomize(self, value_range=(-100, 100), rng=None):
        """
        Resets, then writes a random value in the inclusive *value_range* to
        every index in increasing order. Returns an empty :class:`Touched`.
        """
        lo, hi = value_range
        if lo > hi:
            raise ValueError(f"Empty value range: {value_range!r}")
        if lo < INT64_MIN or hi > INT64_MAX or self._n * max(abs(lo), abs(hi)) > INT64_MAX:
            raise OverflowError(f"Value range {value_range!r} may overflow 64-bit tree sums")
        if rng is None:
            rng = np.random.default_rng()
        self.reset()
        for i in range(1, self._n + 1):
            self.update(i, int(rng.integers(lo, hi, endpoint=True)))
        return Touched()

    def init(self, values):
        """
        Loads *values* in O(n), replacing the array; the length must match.

        Every value is checked before anything is written, like :meth:`update`.

        :raises ValueError: If the number of values is not N.
        :raises InvalidValueFormat: If a value is not an integer.
        :raises OverflowError: If a value or tree sum leaves the int64 range.
        """
        if len(values) != self._n:
            raise ValueError(f"Expected {self._n} values, got {len(values)}")
        a = []
        for value in values:
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidValueFormat(value)
            value = int(value)
            if value < INT64_MIN or value > INT64_MAX:
                raise OverflowError(f"Value {value} does not fit in 64 bits")
            a.append(value)
        v = list(a)
        for idx in range(1, self._n + 1):
            if v[idx - 1] < INT64_MIN or v[idx - 1] > INT64_MAX:
                raise OverflowError(f"Tree cell {idx} would overflow 64 bits")
            parent_idx = idx + lowbit(idx)
            if parent_idx <= self._n:
                v[parent_idx - 1] += v[idx - 1]
        self._a = np.array(a, dtype=np.int64)
        self._v = np.array(v, dtype=np.int64)
        if self.clear_answer_on_update:
            self.last_query = None

    def __eq__(self, other):
        return isinstance(other, FenwickEngine) and self._n == other._n and np.array_equal(self._a, other._a)
