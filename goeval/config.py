# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Evaluator configuration.

Everything process-wide is read once into an `EvalConfig`: which `go` binary
to run, where per-call temp directories go, an optional build/run timeout,
and the import registry. The CLI layers its flags on top of `from_env()`.

Environment:
  GOEVAL_GO       go binary (default: `go` on PATH)
  GOEVAL_TMPDIR   temp root (falls back to TMPDIR, then the system default)
  GOEVAL_TIMEOUT  seconds; unset or empty means no timeout
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from goeval.imports import Registry, load_registry


def _default_temp_dir() -> Path:
	return Path(tempfile.gettempdir())


@dataclass(frozen=True)
class EvalConfig:
	go_binary: str = "go"
	temp_dir: Path = field(default_factory=_default_temp_dir)
	timeout: Optional[float] = None
	registry: Registry = field(default_factory=load_registry)

	@classmethod
	def from_env(cls, environ: Mapping[str, str] | None = None) -> "EvalConfig":
		env = os.environ if environ is None else environ
		temp_root = env.get("GOEVAL_TMPDIR") or env.get("TMPDIR")
		timeout_raw = env.get("GOEVAL_TIMEOUT", "").strip()
		try:
			timeout = float(timeout_raw) if timeout_raw else None
		except ValueError as err:
			raise ValueError(f"GOEVAL_TIMEOUT must be a number of seconds, got {timeout_raw!r}") from err
		return cls(
			go_binary=env.get("GOEVAL_GO") or "go",
			temp_dir=Path(temp_root) if temp_root else _default_temp_dir(),
			timeout=timeout,
		)

	def with_overrides(self, **changes: object) -> "EvalConfig":
		"""Copy with every non-None keyword applied."""
		return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["EvalConfig"]
