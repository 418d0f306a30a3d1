"""Running programs from text, files or an interactive prompt."""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Optional

from .environment import Environment, global_environment
from .evaluator import evaluate
from .parser import ParseError, Parser, parse
from .tokens import tokenize
from .values import EvalError, Value, format_value

PROMPT = "> "


def run_source(text: str, env: Optional[Environment] = None) -> Iterator[Value]:
    """Evaluate each expression in ``text`` in turn, yielding the results."""
    if env is None:
        env = global_environment()
    parser = Parser(tokenize(text))
    while not parser.at_end():
        yield evaluate(parser.parse_expr(), env)


def run_file(path, env: Optional[Environment] = None) -> Iterator[Value]:
    """Read the file at ``path`` and evaluate its expressions lazily."""
    text = Path(path).read_text()
    return run_source(text, env)


def repl(env: Optional[Environment] = None) -> None:
    """Read lines interactively, evaluating the first expression of each."""
    if env is None:
        env = global_environment()
    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line:
            continue
        try:
            result = evaluate(parse(tokenize(line)), env)
        except (ParseError, EvalError) as exc:
            print(exc, file=sys.stderr)
            continue
        print(format_value(result))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a file given as the only argument, or start the prompt."""
    if argv is None:
        argv = sys.argv[1:]
    env = global_environment()
    if len(argv) != 1:
        repl(env)
        return 0
    try:
        results = run_file(argv[0], env)
    except OSError:
        print("Could not open file", file=sys.stderr)
        return 1
    try:
        for result in results:
            print(format_value(result))
    except (ParseError, EvalError) as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    return 0