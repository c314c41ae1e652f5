import numpy as np
import pytest

from FenwickViz.app import Controller, make_settings, parse_index, parse_value
from FenwickViz.BIT.errors import InvalidIndexFormat, InvalidValueFormat


def make(n=8, **overrides) -> Controller:
    return Controller(make_settings(length=n, **overrides))


def test_defaults() -> None:
    controller = Controller()
    assert controller.length == 16
    assert controller.error is None
    assert controller.query_answer is None
    assert not controller.array_highlighted.any()
    assert not controller.tree_highlighted.any()


def test_parse_index() -> None:
    assert parse_index("12") == 12
    assert parse_index("+7") == 7
    assert parse_index("0") == 0
    assert parse_index(str(2 ** 64 - 1)) == 2 ** 64 - 1
    for text in ("", "abc", "-1", "1.5", "1_0", "-0", " 12 ", "\uff11", "99999999999999999999"):
        with pytest.raises(InvalidIndexFormat):
            parse_index(text)


def test_parse_value() -> None:
    assert parse_value("-42") == -42
    assert parse_value(str(2 ** 63 - 1)) == 2 ** 63 - 1
    assert parse_value("+3") == 3
    for text in ("", "x", "1e3", "1_000", " 5", str(2 ** 63)):
        with pytest.raises(InvalidValueFormat):
            parse_value(text)


def test_query_and_update_text() -> None:
    controller = make()
    controller.update_text("3", "5")
    assert controller.error is None
    assert controller.array_highlighted.tolist() == [i == 3 for i in range(1, 9)]
    assert controller.tree_highlighted.tolist() == [i in (3, 4, 8) for i in range(1, 9)]

    assert controller.query_text("4") == 5
    assert controller.query_answer == 5
    assert controller.array_highlighted.tolist() == [i <= 4 for i in range(1, 9)]
    assert controller.tree_highlighted.tolist() == [i == 4 for i in range(1, 9)]


def test_error_messages() -> None:
    controller = make()
    assert controller.query_text("abc") is None
    assert controller.error == "Invalid query index"
    controller.query_text("9")
    assert controller.error == "Invalid query index range (must be between 1 and array length)"
    controller.update_text("x", "1")
    assert controller.error == "Invalid update index"
    controller.update_text("0", "oops")
    assert controller.error == "Invalid update index range (must be between 1 and array length)"
    controller.update_text("2", "oops")
    assert controller.error == "Invalid update value"
    assert controller.array.tolist() == [0] * 8

    controller.query_text("1")
    assert controller.error is None


def test_failed_command_keeps_highlights() -> None:
    controller = make()
    controller.query(5)
    before = controller.tree_highlighted.tolist()
    controller.query(0)
    assert controller.error is not None
    assert controller.tree_highlighted.tolist() == before


def test_update_keeps_stale_answer() -> None:
    controller = make()
    controller.update(2, 4)
    controller.query(2)
    controller.update(2, 9)
    assert controller.query_answer == 4


def test_update_clears_answer_when_configured() -> None:
    controller = make(clear_answer_on_update=True)
    controller.update(2, 4)
    controller.query(2)
    controller.update(2, 9)
    assert controller.query_answer is None


def test_randomize_clears_highlights() -> None:
    controller = make(value_range=(-3, 3))
    controller.query(8)
    controller.randomize(rng=np.random.default_rng(5))
    assert not controller.array_highlighted.any()
    assert not controller.tree_highlighted.any()
    assert all(-3 <= v <= 3 for v in controller.array.tolist())


def test_reset() -> None:
    controller = make()
    controller.randomize(rng=np.random.default_rng(2))
    controller.query_text("6")
    controller.query_text("bad")
    controller.reset()
    assert controller.error is None
    assert controller.query_answer is None
    assert controller.inputs == {'query': '', 'update_index': '', 'update_value': ''}
    assert controller.array.tolist() == [0] * 8
    assert not controller.tree_highlighted.any()
    assert controller.query(8) == 0


def test_set_length_clamps() -> None:
    controller = make()
    assert controller.set_length(100) == 64
    assert controller.length == 64
    assert len(controller.array_highlighted) == 64
    assert controller.set_length(0) == 1
    assert controller.tree.tolist() == [0]


def test_set_length_discards_state() -> None:
    controller = make()
    controller.update(1, 7)
    controller.query(1)
    controller.set_length(4)
    assert controller.array.tolist() == [0] * 4
    assert controller.query_answer is None
    assert not controller.array_highlighted.any()


def test_snapshot() -> None:
    controller = make()
    controller.update(3, 5)
    frame = controller.snapshot()
    assert frame.index.tolist() == list(range(1, 9))
    assert frame.loc[3, 'array'] == 5
    assert frame.loc[8, 'tree'] == 5
    assert frame.loc[6, 'lowbit'] == 2
    assert frame.loc[6, 'range_start'] == 5
    assert frame['tree_highlighted'].tolist() == [i in (3, 4, 8) for i in range(1, 9)]


def test_verbose_prints(capsys) -> None:
    controller = Controller(make_settings(length=4), verbose=True)
    controller.query(3)
    controller.query(7)
    out = capsys.readouterr().out
    assert "query(3) = 0" in out
    assert "WARNING:" in out


def test_make_settings_validation() -> None:
    assert make_settings(font_sizes={'index': 20.0})['font_sizes']['array'] == 16.0
    with pytest.raises(KeyError):
        make_settings(colour='red')
    with pytest.raises(KeyError):
        make_settings(font_sizes={'title': 10.0})
    with pytest.raises(AssertionError):
        make_settings(length=65)
    with pytest.raises(AssertionError):
        make_settings(value_range=(5, -5))
    with pytest.raises(AssertionError):
        make_settings(font_sizes={'array': 2.0})


def test_oversized_index_text_is_a_format_error() -> None:
    controller = make()
    controller.query_text("99999999999999999999")
    assert controller.error == "Invalid query index"
    controller.update_text("1_0", "3")
    assert controller.error == "Invalid update index"
    assert controller.array.tolist() == [0] * 8


def test_randomize_with_overflowing_range_is_rejected() -> None:
    controller = make()
    controller.update(2, 6)
    controller.query(2)
    controller.randomize(value_range=(-(2 ** 62), 2 ** 62))
    assert "overflow" in controller.error
    assert controller.array.tolist() == [0, 6, 0, 0, 0, 0, 0, 0]
    assert controller.tree_highlighted.tolist() == [i == 2 for i in range(1, 9)]
