"""A small Lisp interpreter: tokenizer, parser, evaluator and prompt."""

__version__ = "0.1.0"

__all__ = ["environment", "evaluator", "parser", "repl", "tokens", "values"]