# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Flat Go tokenizer built on lark's basic lexer.

Only used for heuristics that must not look inside string literals or
comments (import inference). It knows nothing about Go syntax beyond token
shapes; comments and whitespace are dropped.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from lark import Lark, Token
from lark.exceptions import UnexpectedInput

_GRAMMAR_PATH = Path(__file__).with_name("go_tokens.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_LEXER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)


class TokenizeError(ValueError):
	"""Raised when the fragment contains text no token shape matches."""

	def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
		super().__init__(message)
		self.line = line
		self.column = column


def tokenize(source: str) -> List[Token]:
	"""Return the token stream of `source` (comments and whitespace removed)."""
	try:
		return list(_LEXER.lex(source))
	except UnexpectedInput as err:
		raise TokenizeError(
			f"cannot tokenize fragment at line {err.line}, column {err.column}",
			line=err.line,
			column=err.column,
		) from err


__all__ = ["Token", "TokenizeError", "tokenize"]
