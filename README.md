# tinylisp

A small Lisp interpreter. It reads s-expressions, evaluates them in a global
environment of arithmetic builtins, and prints each result.

## Installing

    pip install .

## Running

Start an interactive session:

    tinylisp

Each line you type is read as one expression (only the first expression on a
line is evaluated), and its value is printed:

    > (+ 1 2 3)
    6
    > (define sq (lambda (x) (* x x)))
    <function>
    > (sq 7)
    49

Errors are printed to standard error and the session carries on. End the
session with end-of-file (Ctrl-D) or Ctrl-C.

Run a file, printing the value of every top-level expression in it:

    tinylisp program.lisp

If the file cannot be read, `Could not open file` is printed and the exit
status is 1. Evaluation stops at the first error: a reading error exits with
status 64, an evaluation error with status 1.

## The language

Special forms: `define`, `if`, `cond` (with `else`), `quote`, `atom`, `eq`,
`car`, `cdr`, `cons`, `lambda` and `label` (a named, self-recursive lambda,
written `(label name (lambda (params) body))`).

Builtins: `+`, `*`, `-`, `/`, `max`, `min`, `abs`, `sqrt`, `floor`, `ceil`,
`mod` (also `%`), and the booleans `#t` and `#f`.

Numbers are floating point and print in a compact form, so `(/ 1 4)` prints
`0.25`. Strings are written in double quotes. A dotted pair is written
`(a . b)`. Conditions in `if` and `cond` are true when they are a non-zero
number or `#t`.

## Limits

There are no comparison operators (`<`, `>`, `=`), no string operations and
no comments. The `'x` shorthand for `(quote x)` is not recognised: characters
that start no token are dropped silently. String values and builtins print as
`<unknown>`.

## Using it from Python

    from tinylisp.environment import global_environment
    from tinylisp.repl import run_source
    from tinylisp.values import format_value

    env = global_environment()
    for value in run_source("(define x 10) (* x x)", env):
        print(format_value(value))

`run_source` yields results one by one as it evaluates; `run_file` does the
same for the contents of a file, and `repl` runs the interactive prompt.

Lower-level pieces are available too: `tinylisp.tokens.tokenize`,
`tinylisp.parser.parse` and `parse_all` (with `format_ast` to render a tree),
`tinylisp.evaluator.evaluate` and `quote`, and `tinylisp.values.format_value`
and `from_iterable`.

Errors in the input are raised as `tinylisp.parser.ParseError` when reading
and `tinylisp.values.EvalError` when evaluating.