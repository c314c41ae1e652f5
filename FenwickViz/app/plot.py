from matplotlib import patches, pyplot

from ..BIT.utils import lowbit, trailing_zeros


HIGHLIGHT = 'gold'
NORMAL = 'white'
BACKGROUND = '#1b1b1b'

# horizontal layout, in data units
ARRAY_LEFT, ARRAY_RIGHT = 1.0, 2.6
TREE_LEFT, TREE_SPACING, BAR_WIDTH = 3.0, 1.6, 0.25


def draw(state, ax=None, font_sizes=None, dump=None):
    """
    Draws the array column and the Fenwick tree bars of *state*.

    Cell ``i`` occupies the vertical band ``[i - 1, i]``, index 1 at the
    bottom. The bar of ``Tree[i]`` sits in column ``trailing_zeros(i)`` and
    spans every cell it sums. Highlighted cells are drawn in gold.

    Parameters
    ----------
    state : Controller
        Anything exposing ``length``, ``array``, ``tree``,
        ``array_highlighted`` and ``tree_highlighted``.
    ax : matplotlib.axes.Axes or None
        Target axes. A new figure is created if None, and then either shown
        or saved to *dump* and closed.
    font_sizes : dict or None
        ``index``, ``array`` and ``fenwick`` font sizes in points.
    dump : str or None
        Path to save the figure to.

    Returns
    -------
    ax : matplotlib.axes.Axes
    """
    if font_sizes is None:
        font_sizes = {'index': 14.0, 'array': 16.0, 'fenwick': 14.0}
    own_figure = ax is None
    if own_figure:
        _, ax = pyplot.subplots(figsize=(8, max(4, 0.35 * state.length)))

    n = state.length
    array, tree = state.array, state.tree
    array_hl, tree_hl = state.array_highlighted, state.tree_highlighted
    n_columns = n.bit_length()

    ax.set_facecolor(BACKGROUND)
    ax.set_xlim(0, TREE_LEFT + TREE_SPACING * n_columns + 0.5)
    ax.set_ylim(0, n)
    ax.set_xticks([])
    ax.set_yticks([])

    ax.add_patch(patches.Rectangle((ARRAY_LEFT, 0), ARRAY_RIGHT - ARRAY_LEFT, n, fill=False, edgecolor=NORMAL, linewidth=3.5))
    for i in range(1, n + 1):
        y = i - 0.5
        ax.text(0.2, y, str(i), ha='left', va='center', family='monospace', fontsize=font_sizes['index'], color=NORMAL)
        if i < n:
            ax.plot([ARRAY_LEFT, ARRAY_RIGHT], [i, i], color=NORMAL, linewidth=3.5)
        ax.text(
            (ARRAY_LEFT + ARRAY_RIGHT) / 2, y, str(int(array[i - 1])),
            ha='center', va='center', family='monospace', fontsize=font_sizes['array'],
            color=HIGHLIGHT if array_hl[i - 1] else NORMAL,
        )

    for i in range(1, n + 1):
        x = TREE_LEFT + TREE_SPACING * trailing_zeros(i)
        bottom = i - lowbit(i)
        color = HIGHLIGHT if tree_hl[i - 1] else NORMAL
        ax.add_patch(patches.FancyBboxPatch((x, bottom + 0.05), BAR_WIDTH, lowbit(i) - 0.1, boxstyle='round,pad=0,rounding_size=0.05', color=color))
        ax.text(
            x + BAR_WIDTH + 0.1, bottom + lowbit(i) / 2, str(int(tree[i - 1])),
            ha='left', va='center', family='monospace', fontsize=font_sizes['fenwick'], color=color,
        )

    if own_figure:
        if dump is None:
            pyplot.show()
        else:
            pyplot.savefig(dump)
        pyplot.close()
    elif dump is not None:
        ax.figure.savefig(dump)
    return ax
