# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Assemble a runnable `package main` program around a partitioned fragment.

Layout of the generated file:

	package main
	import "fmt"            (always, unless the fragment imports it itself)
	import "<path>"         (one per inferred import, sorted)
	<import chunks>         (Go wants every import ahead of other declarations)
	func __p(...)           (print helper behind the `p` alias)
	<declaration chunks>
	func main() {
	<statement chunks>
	}

Chunks are pasted verbatim, markers included; `goeval.line_map` recovers the
original line numbers from them, so the boilerplate line count is free to
change.
"""

from __future__ import annotations

import re
from typing import AbstractSet, Iterable

from goeval.imports import is_import_chunk
from goeval.lexer import TokenizeError, tokenize
from goeval.partition import Partition

PRINT_HELPER = "__p"
# The print helper is written against fmt, so fmt is always imported.
HELPER_IMPORTS = ("fmt",)

# `p x` prints; `p = x`, `p := x`, `p += x`, `p++` and `p, q := ...` stay assignments.
_ALIAS = re.compile(r"^([ \t]*)p +(?!:?=(?!=)|[-+*/%&|^]=|<<=|>>=|&\^=|\+\+|--|,)(.*)$", re.MULTILINE)
_PACKAGE_CLAUSE = re.compile(r"^\s*package\s")

_HELPER_SRC = f"""func {PRINT_HELPER}(values ...interface{{}}) {{
	fmt.Println(values...)
}}
"""


def _split_trailing_comment(args: str) -> tuple[str, str]:
	"""Split `a, b // note` into `a, b` and ` // note`; a `//` inside a string stays put."""
	if "//" not in args:
		return args, ""
	try:
		tokens = tokenize(args)
	except TokenizeError:
		return args, ""
	end = tokens[-1].end_pos if tokens else 0
	return args[:end], args[end:]


def _expand_alias(m: re.Match) -> str:
	args, comment = _split_trailing_comment(m.group(2))
	return f"{m.group(1)}{PRINT_HELPER}({args}){comment}"


def expand_aliases(fragment: str) -> str:
	"""Rewrite `p a, b` lines to `__p(a, b)`; indentation and line count are kept."""
	return _ALIAS.sub(_expand_alias, fragment)


def has_package_clause(fragment: str) -> bool:
	"""True when the fragment is already a whole program (pass-through mode)."""
	return _PACKAGE_CLAUSE.match(fragment) is not None


def _import_lines(paths: Iterable[str]) -> str:
	return "".join(f'import "{path}"\n' for path in paths)


def assemble_program(
	part: Partition,
	imports: AbstractSet[str],
	*,
	explicit: AbstractSet[str] = frozenset(),
) -> str:
	"""
	Build the program text for `part`.

	`imports` holds inferred paths; anything the helper already needs or the
	fragment imports explicitly (`explicit`) is left out so no path is
	imported twice.
	"""
	forced = [p for p in HELPER_IMPORTS if p not in explicit]
	inferred = sorted(p for p in imports if p not in HELPER_IMPORTS and p not in explicit)
	import_decls = "".join(c for c in part.declarations if is_import_chunk(c))
	decls = "".join(c for c in part.declarations if not is_import_chunk(c))
	stmts = "".join(part.statements)
	return (
		"package main\n"
		+ _import_lines(forced)
		+ _import_lines(inferred)
		+ import_decls
		+ ("" if not import_decls or import_decls.endswith("\n") else "\n")
		+ _HELPER_SRC
		+ decls
		+ ("" if not decls or decls.endswith("\n") else "\n")
		+ "func main() {\n"
		+ stmts
		+ ("" if not stmts or stmts.endswith("\n") else "\n")
		+ "}\n"
	)


__all__ = [
	"HELPER_IMPORTS",
	"PRINT_HELPER",
	"assemble_program",
	"expand_aliases",
	"has_package_clause",
]
