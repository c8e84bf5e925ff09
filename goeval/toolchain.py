# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Build-and-run collaborator: hands a complete program to `go run`.

Each call gets its own temporary directory under the configured temp root,
so concurrent evaluations never write the same file. stdout and stderr of
the build and of the program are captured together. On timeout the whole
process group (`go` and the program it started) is killed.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from goeval.core.errors import ToolchainError

logger = logging.getLogger(__name__)

SOURCE_NAME = "main.go"


@dataclass(frozen=True)
class BuildResult:
	ok: bool
	output: str


class Toolchain(Protocol):
	def run(self, source: str) -> BuildResult:
		...


class GoToolchain:
	"""`go run` in a fresh temp directory per call."""

	def __init__(self, go_binary: str = "go", temp_dir: Path | None = None, timeout: Optional[float] = None) -> None:
		self.go_binary = go_binary
		self.temp_dir = temp_dir
		self.timeout = timeout

	def resolve_binary(self) -> str:
		path = shutil.which(self.go_binary)
		if path is None:
			raise ToolchainError("toolchain-missing", f"go toolchain not found: {self.go_binary!r}")
		return path

	def run(self, source: str) -> BuildResult:
		go = self.resolve_binary()
		if self.temp_dir is not None:
			self.temp_dir.mkdir(parents=True, exist_ok=True)
		with tempfile.TemporaryDirectory(prefix="goeval-", dir=self.temp_dir) as work:
			src_path = Path(work) / SOURCE_NAME
			src_path.write_text(source)
			cmd = [go, "run", str(src_path)]
			logger.debug("running %s", " ".join(cmd))
			try:
				# Own session: `go run` execs the built binary as a child, and a
				# timeout has to take both down.
				proc = subprocess.Popen(
					cmd,
					cwd=work,
					stdout=subprocess.PIPE,
					stderr=subprocess.STDOUT,
					text=True,
					start_new_session=True,
				)
			except OSError as err:
				raise ToolchainError("toolchain-failed", f"cannot start {go}: {err}") from err
			try:
				output, _ = proc.communicate(timeout=self.timeout)
			except subprocess.TimeoutExpired:
				logger.debug("go run timed out after %ss; killing process group %d", self.timeout, proc.pid)
				_kill_group(proc)
				return BuildResult(ok=False, output=f"timeout: program did not finish within {self.timeout}s\n")
		logger.debug("go run exited with %d", proc.returncode)
		return BuildResult(ok=proc.returncode == 0, output=output or "")


def _kill_group(proc: subprocess.Popen) -> None:
	try:
		os.killpg(proc.pid, signal.SIGKILL)
	except ProcessLookupError:
		pass
	proc.communicate()


__all__ = ["BuildResult", "GoToolchain", "SOURCE_NAME", "Toolchain"]
