# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy for the evaluator.

Errors raised inside the pipeline never escape `Evaluator.evaluate`; they are
folded into an `EvalResult`. The split matters for callers and tests:

- `StructuralError`: the fragment itself is malformed (unbalanced brackets).
  It is the user's problem and is reported like a compile diagnostic.
- `InternalError`: an integrity check inside goeval failed. It is reported
  with an "internal error" prefix so it is not mistaken for a bug in the
  user's code.
- `ToolchainError`: the external `go` toolchain could not be started.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EvalError(Exception):
	"""A structured error raised by the goeval pipeline."""

	reason_code: str
	message: str
	line: int | None = None  # original fragment line, when known

	def __str__(self) -> str:
		return self.format_human()

	@property
	def user_facing(self) -> bool:
		return False

	def format_human(self) -> str:
		return f"[{self.reason_code}] {self.message}"

	def as_diagnostic(self) -> str:
		"""Render as diagnostic text for the two-slot result."""
		if self.line is not None:
			return f"{self.line}: {self.message}\n"
		return f"{self.message}\n"


@dataclass(frozen=True)
class StructuralError(EvalError):
	"""The fragment cannot be chunked (e.g. mismatched brackets)."""

	@property
	def user_facing(self) -> bool:
		return True


@dataclass(frozen=True)
class InternalError(EvalError):
	"""An integrity check inside goeval failed."""

	def as_diagnostic(self) -> str:
		return f"internal error: {self.message}\n"


@dataclass(frozen=True)
class ToolchainError(InternalError):
	"""The external toolchain could not be invoked at all."""


__all__ = ["EvalError", "StructuralError", "InternalError", "ToolchainError"]
