# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structured view of toolchain diagnostics.

The evaluator's contract is a plain diagnostic string. For `--json` output and
for tests we also split that string into `Diagnostic` records: one per line
that carries a location, with indented follow-up lines (e.g. Go's
"other declaration of x") attached as notes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .span import Span

# `12:5: msg` (remapped) or `./main.go:12:5: msg` (native numbering).
_LOCATED = re.compile(r"^(?:(?P<file>[^:]*[^\d\s:][^:]*):)?(?P<line>\d+):(?:(?P<col>\d+):)?\s?(?P<msg>.*)$")


@dataclass
class Diagnostic:
	"""Represents a single toolchain diagnostic."""

	message: str
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def to_json(self) -> dict:
		return {
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def parse_diagnostics(text: str, phase: str | None = None) -> list[Diagnostic]:
	"""
	Split diagnostic text into records.

	Unlocated lines that follow a located one (indented or not) become its
	notes; unlocated lines before any located line become standalone
	diagnostics with an unknown span.
	"""
	diags: list[Diagnostic] = []
	for raw in text.splitlines():
		if not raw.strip():
			continue
		m = _LOCATED.match(raw)
		if m is not None and not raw[:1].isspace():
			span = Span(
				file=m.group("file"),
				line=int(m.group("line")),
				column=int(m.group("col")) if m.group("col") else None,
			)
			diags.append(Diagnostic(message=m.group("msg").strip(), phase=phase, span=span))
			continue
		if diags and diags[-1].span.known:
			diags[-1].notes.append(raw.strip())
		else:
			diags.append(Diagnostic(message=raw.strip(), phase=phase))
	return diags


__all__ = ["Diagnostic", "parse_diagnostics"]
