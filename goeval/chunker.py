# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Split marker-embedded Go text into chunks.

A chunk is either a single line or, when a line ends in `{` or `(`, the block
running up to the bracket that balances it. Only the bracket type that opened
the block is counted, and brackets inside string or rune literals are counted
like any other (there is no tokenizer here). Concatenating every chunk in
order reproduces the input exactly.
"""

from __future__ import annotations

import re
from typing import Iterator

from goeval.core.errors import StructuralError
from goeval.line_map import marker_line

_CLOSERS = {"{": "}", "(": ")"}

# `... { //#12` : the opener is the last thing on the line before its marker.
_OPEN_AT_EOL = re.compile(r"([{(]) *//#\d+$")
_MARKER_ONLY_LINE = re.compile(r"[ \t]*//#\d+\n")


def next_chunk(text: str, pos: int = 0) -> str:
	"""Return the chunk starting at `pos` ("" at end of input)."""
	if pos >= len(text):
		return ""
	nl = text.find("\n", pos)
	if nl == -1:
		return text[pos:]
	end = nl + 1
	if nl == pos:
		return text[pos:end]

	m = _OPEN_AT_EOL.search(text, pos, nl)
	if m is None:
		return text[pos:end]

	opener = m.group(1)
	closer = _CLOSERS[opener]
	depth = 1
	i = end
	while i < len(text):
		ch = text[i]
		if ch == opener:
			depth += 1
		elif ch == closer:
			depth -= 1
			if depth == 0:
				break
		i += 1
	if depth != 0:
		line = marker_line(text[pos:end])
		raise StructuralError(
			"mismatched-brackets",
			f"mismatched brackets: no closing {closer!r} for {opener!r} opened here",
			line=line,
		)

	# Take the rest of the closer's line (e.g. `}()` or `})`) and its marker.
	line_end = text.find("\n", i)
	end = len(text) if line_end == -1 else line_end + 1
	trailing = _MARKER_ONLY_LINE.match(text, end)
	if trailing is not None:
		end = trailing.end()
	return text[pos:end]


def iter_chunks(text: str) -> Iterator[str]:
	"""Yield successive chunks until the input is consumed."""
	pos = 0
	while True:
		chunk = next_chunk(text, pos)
		if not chunk:
			return
		yield chunk
		pos += len(chunk)


__all__ = ["iter_chunks", "next_chunk"]
