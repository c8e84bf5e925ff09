# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source location attached to a diagnostic.

Lines always refer to the user's fragment once the diagnostic has been
remapped; `file` is only set when the toolchain reported a path we kept
(pass-through mode).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Span:
	"""Best-effort file/line/column location (Span() denotes unknown)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None

	@property
	def known(self) -> bool:
		return self.line is not None

	def format(self, default_file: str = "<fragment>") -> str:
		"""Render as `file:line:col`, using `?` for missing parts."""
		line = "?" if self.line is None else str(self.line)
		column = "?" if self.column is None else str(self.column)
		return f"{self.file or default_file}:{line}:{column}"


__all__ = ["Span"]
