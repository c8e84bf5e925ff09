# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Bucket chunks into top-level declarations and `main` body statements.

Declarations (`import`, `type`, named functions and methods) are hoisted to
package scope; everything else runs inside `func main()`. Both sequences keep
the fragment's relative order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from goeval.chunker import iter_chunks

# `func (r *T) Name(` and `func Name(` are declarations; `func() {...}()` is not.
_DECL_START = re.compile(
	r"^\s*(?:import\b|type\b|func(?:\s*\([^)]*\)\s*|\s+)[A-Za-z_]\w*\s*[\[(])"
)


@dataclass(frozen=True)
class Partition:
	declarations: Tuple[str, ...] = ()
	statements: Tuple[str, ...] = ()

	def total_length(self) -> int:
		return sum(map(len, self.declarations)) + sum(map(len, self.statements))


def is_declaration(chunk: str) -> bool:
	return _DECL_START.match(chunk) is not None


def partition(text: str) -> Partition:
	"""Split marker-embedded text into declaration and statement chunks."""
	declarations: list[str] = []
	statements: list[str] = []
	for chunk in iter_chunks(text):
		if is_declaration(chunk):
			declarations.append(chunk)
		else:
			statements.append(chunk)
	return Partition(declarations=tuple(declarations), statements=tuple(statements))


__all__ = ["Partition", "is_declaration", "partition"]
