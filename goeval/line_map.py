# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Line-number provenance for assembled programs.

Every line of the fragment is tagged at the end with `//#N` (N = original
1-based line) before chunks are reordered. After assembly the markers are
read back to build a map from physical line in the compiled file to original
line, then stripped so the compiler never sees them. Boilerplate lines added
by the assembler carry no marker and therefore have no map entry.

A marker is a Go line comment, so a line ending in a `//` comment simply has
the marker folded into that comment.
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

from goeval.core.errors import InternalError

MARKER_PREFIX = "//#"

_MARKER = re.compile(r"//#(\d+)$", re.MULTILINE)
# Diagnostic lines look like `./main.go:12:5: undefined: x`.
_LOCATED = re.compile(r"^.*?:(\d+):")
_BANNER = "# command-line-arguments"

LineMap = Dict[int, int]


def marker(line_no: int) -> str:
	return f"{MARKER_PREFIX}{line_no}"


def embed_line_numbers(fragment: str) -> str:
	"""Append `//#N` to every line; a missing trailing newline is added first."""
	if not fragment.endswith("\n"):
		fragment += "\n"
	lines = fragment.split("\n")[:-1]
	return "".join(f"{text}{marker(n)}\n" for n, text in enumerate(lines, start=1))


def extract_line_numbers(program: str) -> Tuple[str, LineMap]:
	"""Return the marker-free program and its synthesized -> original line map."""
	mapping: LineMap = {}
	for new_line, text in enumerate(program.split("\n"), start=1):
		m = _MARKER.search(text)
		if m is not None:
			mapping[new_line] = int(m.group(1))
	return _MARKER.sub("", program), mapping


def marker_line(text: str) -> int | None:
	"""Original line number carried by the first marker in `text`, if any."""
	m = _MARKER.search(text)
	return int(m.group(1)) if m is not None else None


def remap_diagnostic(diagnostic: str, mapping: LineMap) -> str:
	"""
	Rewrite `path:NN:` prefixes to original fragment lines.

	Mapped lines become `orig:rest`; lines without a map entry and lines
	without a location prefix pass through verbatim. Blank lines and the
	`go run` package banner are dropped.
	"""
	out: list[str] = []
	for line in diagnostic.split("\n"):
		if not line or line.startswith(_BANNER):
			continue
		m = _LOCATED.match(line)
		if m is None:
			out.append(line)
			continue
		try:
			new_line = int(m.group(1))
		except ValueError as err:
			raise InternalError("line-number", f"unable to convert line number {m.group(1)!r}") from err
		old_line = mapping.get(new_line)
		if old_line is None:
			out.append(line)
		else:
			out.append(f"{old_line}:{line[m.end():]}")
	return "".join(f"{line}\n" for line in out)


__all__ = [
	"LineMap",
	"MARKER_PREFIX",
	"embed_line_numbers",
	"extract_line_numbers",
	"marker",
	"marker_line",
	"remap_diagnostic",
]
