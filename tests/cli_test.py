import io

import numpy as np

from FenwickViz.__main__ import execute, main
from FenwickViz.app import Controller, make_settings


def test_execute_commands(capsys) -> None:
    controller = Controller(make_settings(length=8))
    rng = np.random.default_rng(0)
    assert execute(controller, "update 3 5", rng)
    assert execute(controller, "query 4", rng)
    assert "Query answer: 5" in capsys.readouterr().out

    execute(controller, "query 9", rng)
    assert "must be between 1 and array length" in capsys.readouterr().out

    execute(controller, "resize 4", rng)
    assert controller.length == 4
    execute(controller, "show", rng)
    assert "range_start" in capsys.readouterr().out

    execute(controller, "frobnicate", rng)
    assert "unknown command" in capsys.readouterr().out
    assert not execute(controller, "quit", rng)


def test_main_loop(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("update 1 2\nquery 1\nquit\nquery 1\n"))
    assert main(["-n", "4"]) == 0
    out = capsys.readouterr().out
    assert out.count("Query answer: 2") == 1


def test_main_check(capsys) -> None:
    assert main(["--check", "5", "--seed", "1"]) == 0
    assert "0 failure(s) in 5 trial(s)" in capsys.readouterr().out
