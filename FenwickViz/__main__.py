from __future__ import annotations

import argparse
import sys
from typing import Optional, TYPE_CHECKING

import numpy as np

from .app import Controller, make_settings
from .BIT.utils import random_trials


HELP = """Commands:
  query X         prefix sum of index X
  update X Y      set the value at index X to Y
  randomize       fill the array with random values
  reset           zero the array
  resize N        change the array length (clamped to the allowed range)
  show            print the array and the tree
  plot [FILE]     draw the structure, or save it to FILE
  help            show this message
  quit            leave"""


class Namespace(argparse.Namespace):
    if TYPE_CHECKING:
        length: int
        seed: Optional[int]
        verbose: bool
        check: Optional[int]
        clear_answer: bool


def show(controller):
    frame = controller.snapshot()
    frame['array'] = [f'*{v}' if hl else str(v) for v, hl in zip(frame['array'], frame['array_highlighted'])]
    frame['tree'] = [f'*{v}' if hl else str(v) for v, hl in zip(frame['tree'], frame['tree_highlighted'])]
    print(frame[['array', 'tree', 'range_start']].to_string())
    if controller.query_answer is not None:
        print(f'Query answer: {controller.query_answer}')


def execute(controller, line, rng):
    """ Runs one command line; returns False when the loop should stop. """
    words = line.split()
    if not words:
        return True
    command, args = words[0].lower(), words[1:]

    if command in ('quit', 'exit'):
        return False
    elif command == 'help':
        print(HELP)
    elif command == 'query' and len(args) == 1:
        answer = controller.query_text(args[0])
        if answer is not None:
            print(f'Query answer: {answer}')
    elif command == 'update' and len(args) == 2:
        controller.update_text(args[0], args[1])
    elif command == 'randomize' and not args:
        controller.randomize(rng=rng)
    elif command == 'reset' and not args:
        controller.reset()
    elif command == 'resize' and len(args) == 1:
        try:
            n = int(args[0])
        except ValueError:
            print(f'WARNING: invalid array length {args[0]!r}')
            return True
        print(f'Array length: {controller.set_length(n)}')
    elif command == 'show' and not args:
        show(controller)
    elif command == 'plot' and len(args) <= 1:
        controller.plot(dump=args[0] if args else None)
    else:
        print(f'WARNING: unknown command {line.strip()!r}, type "help" for a list')
        return True

    if controller.error is not None:
        print(controller.error)
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(prog='python -m FenwickViz', description='Interactive Fenwick tree (binary indexed tree) simulator')
    parser.add_argument('-n', '--length', default=16, type=int, help='the initial array length (default: 16)')
    parser.add_argument('-s', '--seed', default=None, type=int, help='seed used by the randomize command')
    parser.add_argument('-v', '--verbose', action='store_true', help='print a trace line for every command')
    parser.add_argument('--clear-answer', action='store_true', help='forget the last query answer after every update')
    parser.add_argument('--check', default=None, type=int, metavar='TRIALS', help='run randomized consistency checks and exit')

    namespace = Namespace()
    parser.parse_args(argv, namespace=namespace)

    if namespace.check is not None:
        failures = random_trials(n_trials=namespace.check, seed=namespace.seed)
        for failure in failures:
            print('Trial {0} (N={1}), step {2}: {3}'.format(*failure))
        print(f'{len(failures)} failure(s) in {namespace.check} trial(s)')
        return 1 if failures else 0

    settings = make_settings(clear_answer_on_update=namespace.clear_answer)
    controller = Controller(settings, verbose=namespace.verbose)
    controller.set_length(namespace.length)
    rng = np.random.default_rng(namespace.seed)

    print(HELP)
    for line in sys.stdin:
        if not execute(controller, line, rng):
            break
    return 0


if __name__ == '__main__':
    sys.exit(main())
