import numpy as np
from tqdm import tqdm


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def lowbit(i):
    """ Value of the lowest set bit of *i* (``i`` must be positive). """
    return i & -i


def trailing_zeros(i):
    """ Number of trailing zero bits of a positive *i*. """
    return lowbit(i).bit_length() - 1


def covered_range(i):
    """ Inclusive 1-based range ``(start, stop)`` of array cells summed in ``Tree[i]``. """
    return i - lowbit(i) + 1, i


def query_path(index):
    """ Tree indices visited by a prefix-sum descent from *index* down to 0. """
    path = []
    while index > 0:
        path.append(index)
        index -= lowbit(index)
    return path


def update_path(index, n):
    """ Tree indices visited by a point-update ascent from *index* past *n*. """
    path = []
    while index <= n:
        path.append(index)
        index += lowbit(index)
    return path


def naive_prefix_sum(array, k):
    """ Linear-scan prefix sum of the 1-based *array* up to and including *k*. """
    return int(sum(int(v) for v in array[:k]))


def naive_tree(array):
    """
    Builds the Fenwick tree of *array* directly from its definition.

    ``Tree[i] = sum(Array[i - lowbit(i) + 1 .. i])``, computed without the
    ascent so that it can be used as an independent reference.
    """
    n = len(array)
    tree = np.zeros(n, dtype=np.int64)
    for i in range(1, n + 1):
        start, stop = covered_range(i)
        tree[i - 1] = sum(int(v) for v in array[start - 1:stop])
    return tree


def random_trials(n_trials=100, max_length=64, value_range=(-100, 100), n_updates=50, seed=None, use_tqdm=True):
    """
    Runs randomized update/query sequences against a naive reference.

    Parameters
    ----------
    n_trials : int
        Number of independent engines to exercise.
    max_length : int
        Each engine gets a length drawn uniformly in ``1..max_length``.
    value_range : tuple of int
        Inclusive bounds of the values written by updates.
    n_updates : int
        Number of updates per trial; a query follows every update.
    seed : int or None
        Seed of the ``numpy`` generator.
    use_tqdm : bool
        Whether to display a progress bar.

    Returns
    -------
    failures : list of tuple
        ``(trial, length, step, message)`` for every mismatch found. Empty
        when the engine agrees with the reference everywhere.
    """
    from .FenwickEngine import FenwickEngine

    rng = np.random.default_rng(seed)
    lo, hi = value_range
    failures = []
    trials = range(n_trials)
    if use_tqdm:
        trials = tqdm(trials, desc='random trials')
    for trial in trials:
        n = int(rng.integers(1, max_length, endpoint=True))
        engine = FenwickEngine(n)
        for step in range(n_updates):
            index = int(rng.integers(1, n, endpoint=True))
            engine.update(index, int(rng.integers(lo, hi, endpoint=True)))
            if not np.array_equal(engine.tree, naive_tree(engine.array)):
                failures.append((trial, n, step, 'tree invariant broken'))
            k = int(rng.integers(1, n, endpoint=True))
            expected = naive_prefix_sum(engine.array, k)
            got = engine.query(k).sum
            if got != expected:
                failures.append((trial, n, step, f'query({k}) = {got}, expected {expected}'))
    return failures
