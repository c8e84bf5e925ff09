# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
The evaluator's result type.

Externally the contract is a pair `(output, diagnostic)` with exactly one side
populated. `kind` additionally records whose fault a failure is, so callers
(and tests) can tell a user diagnostic from a goeval integrity failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from .diagnostics import Diagnostic, parse_diagnostics
from .errors import EvalError

ResultKind = Literal["ok", "user", "internal"]


@dataclass(frozen=True)
class EvalResult:
	output: str = ""
	diagnostic: str = ""
	kind: ResultKind = "ok"

	@classmethod
	def success(cls, output: str) -> "EvalResult":
		return cls(output=output, diagnostic="", kind="ok")

	@classmethod
	def failure(cls, diagnostic: str) -> "EvalResult":
		# A failed build that printed nothing still has to occupy the diagnostic slot.
		return cls(output="", diagnostic=diagnostic or "build failed without output\n", kind="user")

	@classmethod
	def from_error(cls, err: EvalError) -> "EvalResult":
		kind: ResultKind = "user" if err.user_facing else "internal"
		return cls(output="", diagnostic=err.as_diagnostic(), kind=kind)

	@property
	def ok(self) -> bool:
		return self.kind == "ok"

	def as_pair(self) -> Tuple[str, str]:
		return self.output, self.diagnostic

	def diagnostics(self) -> list[Diagnostic]:
		phase = None if self.ok else ("internal" if self.kind == "internal" else "build")
		return parse_diagnostics(self.diagnostic, phase=phase)

	def exit_code(self) -> int:
		return {"ok": 0, "user": 1, "internal": 2}[self.kind]


__all__ = ["EvalResult", "ResultKind"]
