"""Monkey interpreter.

Basic program flow:
    1. Lexer: scans source text into a stream of tokens (see monkey/syntax/lexer.py)
    2. Parser: a Pratt (operator-precedence) parser turns the token stream into an abstract syntax tree
        - Malformed statements are reported as ParseErrors and skipped, so one pass can report several faults
    3. Evaluator: walks the syntax tree and produces runtime objects (see monkey/runtime/evaluator.py)
        - Runtime faults are Error objects, not Python exceptions: they are returned up the tree like any other value

The `syntax` package knows nothing about evaluation, and the `runtime` package knows nothing about the command-line
host in `lang`.
"""
