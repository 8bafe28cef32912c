"""Building blocks of a small shell: variables, parsing, built-ins and pipeline execution."""

__version__ = "1.0.0"
__all__ = [
    "builtins",
    "errors",
    "executor",
    "lexer",
    "parser",
    "path",
    "prompt",
    "state",
    "variables",
]