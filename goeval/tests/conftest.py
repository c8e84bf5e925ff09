# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import shutil
from typing import Callable, Iterable

import pytest

from goeval.config import EvalConfig
from goeval.imports import load_registry
from goeval.toolchain import BuildResult


class FakeToolchain:
	"""
	Scripted stand-in for `go run`.

	Each call pops the next scripted BuildResult (the last one repeats) and
	records the program it was given, so tests can assert on what would have
	been compiled.
	"""

	def __init__(self, results: Iterable[BuildResult]) -> None:
		self.results = list(results) or [BuildResult(ok=True, output="")]
		self.sources: list[str] = []

	def run(self, source: str) -> BuildResult:
		self.sources.append(source)
		idx = min(len(self.sources), len(self.results)) - 1
		return self.results[idx]


@pytest.fixture
def fake_toolchain() -> Callable[..., FakeToolchain]:
	def make(*results: BuildResult) -> FakeToolchain:
		return FakeToolchain(results)

	return make


@pytest.fixture
def eval_config(tmp_path) -> EvalConfig:
	return EvalConfig(go_binary="go", temp_dir=tmp_path, timeout=None, registry=load_registry())


@pytest.fixture
def go_binary() -> str:
	go = shutil.which("go")
	if go is None:
		pytest.skip("go toolchain not available")
	return go
