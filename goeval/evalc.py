# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
goeval driver: fragment in, program output or remapped diagnostic out.

	fragment
	  -> pass-through if it already starts with `package`
	  -> expand `p ...` aliases
	  -> infer imports
	  -> embed `//#N` line markers
	  -> chunk + partition into declarations / statements
	  -> assemble `package main`
	  -> go run
	  -> on failure, drop rejected inferred imports and rebuild once

Example:

	Evaluator().evaluate('''
		p "Eval demo"
		type A struct {
			S string
			V int
		}
		a := A{S: "The answer is", V: 42}
		p "a =", a
		fmt.Printf("%s: %d\\n", a.S, a.V)
	''').as_pair()

returns ("Eval demo\\na = {The answer is 42}\\nThe answer is: 42\\n", "").
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from goeval.assemble import HELPER_IMPORTS, assemble_program, expand_aliases, has_package_clause
from goeval.config import EvalConfig
from goeval.core.errors import EvalError, InternalError
from goeval.core.result import EvalResult
from goeval.imports import explicit_import_names, explicit_imports, infer_imports, package_name
from goeval.line_map import LineMap, embed_line_numbers, extract_line_numbers, remap_diagnostic
from goeval.partition import Partition, partition
from goeval.repair import removable_imports
from goeval.toolchain import GoToolchain, Toolchain

logger = logging.getLogger(__name__)


@dataclass
class Program:
	"""A fragment prepared for building; `imports` shrinks during repair."""

	part: Partition
	imports: set[str]
	explicit: frozenset[str] = frozenset()
	attempts: int = 0

	def source(self) -> str:
		return assemble_program(self.part, self.imports, explicit=self.explicit)


@dataclass
class Evaluator:
	config: EvalConfig = field(default_factory=EvalConfig.from_env)
	toolchain: Optional[Toolchain] = None

	def __post_init__(self) -> None:
		if self.toolchain is None:
			self.toolchain = GoToolchain(
				go_binary=self.config.go_binary,
				temp_dir=self.config.temp_dir,
				timeout=self.config.timeout,
			)

	def evaluate(self, fragment: str) -> EvalResult:
		"""Build and run `fragment`; never raises for user or internal failures."""
		try:
			if has_package_clause(fragment):
				logger.debug("fragment declares its own package; passing through")
				return self._run(fragment, {})
			return self._build_and_repair(self.prepare(fragment))
		except EvalError as err:
			logger.debug("evaluation aborted: %s", err)
			return EvalResult.from_error(err)
		except Exception as err:  # integrity failures in goeval itself
			logger.debug("unexpected failure while evaluating fragment", exc_info=True)
			return EvalResult.from_error(InternalError("unexpected", f"{type(err).__name__}: {err}"))

	def prepare(self, fragment: str) -> Program:
		"""Run the source pipeline up to (not including) assembly."""
		code = expand_aliases(fragment)
		imports = infer_imports(code, self.config.registry)
		part = partition(embed_line_numbers(code))
		explicit = frozenset(explicit_imports(part.declarations))
		# A guess whose package name an explicit import (or its alias) already binds
		# would collide with it: `import "crypto/rand"` + `rand.Read` is not math/rand.
		bound = explicit_import_names(part.declarations)
		imports = {path for path in imports if path not in explicit and package_name(path) not in bound}
		imports.difference_update(HELPER_IMPORTS)
		logger.debug("inferred imports: %s", sorted(imports))
		return Program(part=part, imports=imports, explicit=explicit)

	def render(self, fragment: str) -> str:
		"""The marker-free program that would be handed to the toolchain."""
		if has_package_clause(fragment):
			return fragment
		source, _ = extract_line_numbers(self.prepare(fragment).source())
		return source

	def _build_and_repair(self, program: Program) -> EvalResult:
		result = self._build(program)
		if result.ok:
			return result.final
		rejected = removable_imports(result.raw, program.imports)
		if not rejected:
			return result.final
		logger.debug("dropping rejected imports %s and rebuilding", sorted(rejected))
		program.imports -= rejected
		return self._build(program).final

	def _build(self, program: Program) -> "_Attempt":
		program.attempts += 1
		source, line_map = extract_line_numbers(program.source())
		return self._attempt(source, line_map)

	def _run(self, source: str, line_map: LineMap) -> EvalResult:
		return self._attempt(source, line_map).final

	def _attempt(self, source: str, line_map: LineMap) -> "_Attempt":
		assert self.toolchain is not None
		res = self.toolchain.run(source)
		if res.ok:
			return _Attempt(final=EvalResult.success(res.output), raw="")
		return _Attempt(final=EvalResult.failure(remap_diagnostic(res.output, line_map)), raw=res.output)


@dataclass(frozen=True)
class _Attempt:
	final: EvalResult
	raw: str  # diagnostic as the compiler printed it (unmapped)

	@property
	def ok(self) -> bool:
		return self.final.ok


def evaluate(fragment: str, config: EvalConfig | None = None, toolchain: Toolchain | None = None) -> EvalResult:
	"""Evaluate a Go fragment with a fresh `Evaluator`."""
	return Evaluator(config=config or EvalConfig.from_env(), toolchain=toolchain).evaluate(fragment)


def _from_stdin(args: argparse.Namespace) -> bool:
	return args.expr is None and (args.source is None or str(args.source) == "-")


def _fragment_name(args: argparse.Namespace) -> str:
	if args.expr is not None:
		return "<expr>"
	return "<stdin>" if _from_stdin(args) else str(args.source)


def _read_fragment(args: argparse.Namespace) -> str:
	if args.expr is not None:
		return args.expr
	if _from_stdin(args):
		return sys.stdin.read()
	return args.source.read_text()


def main(argv: list[str] | None = None) -> int:
	"""
	CLI: evaluate a fragment from a file, `-e`, or stdin.

	Program output goes to stdout. Diagnostics go to stderr as
	`<fragment>:line:col: error: message`, or as a JSON payload with --json.
	Exit code: 0 success, 1 diagnostic in the fragment, 2 goeval/toolchain failure.
	"""
	parser = argparse.ArgumentParser(prog="goeval", description="Run a Go fragment without package/main boilerplate")
	parser.add_argument("source", type=Path, nargs="?", help="Fragment file (default: stdin; '-' also means stdin)")
	parser.add_argument("-e", "--expr", type=str, default=None, help="Fragment text given on the command line")
	parser.add_argument("--json", action="store_true", help="Emit output and diagnostics as JSON")
	parser.add_argument("--emit-source", action="store_true", help="Print the assembled program instead of running it")
	parser.add_argument("--go", dest="go_binary", type=str, default=None, help="go binary to use (default: $GOEVAL_GO or go)")
	parser.add_argument("--tmp-dir", dest="temp_dir", type=Path, default=None, help="Root for per-run temp directories")
	parser.add_argument("--timeout", type=float, default=None, help="Seconds to allow for build and run (default: none)")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline decisions to stderr")
	args = parser.parse_args(argv)

	if args.verbose:
		logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

	try:
		config = EvalConfig.from_env().with_overrides(
			go_binary=args.go_binary,
			temp_dir=args.temp_dir,
			timeout=args.timeout,
		)
		fragment = _read_fragment(args)
	except (OSError, ValueError) as err:
		print(f"goeval: error: {err}", file=sys.stderr)
		return 2

	evaluator = Evaluator(config=config)
	if args.emit_source:
		try:
			sys.stdout.write(evaluator.render(fragment))
		except EvalError as err:
			print(f"goeval: error: {err.as_diagnostic().rstrip()}", file=sys.stderr)
			return EvalResult.from_error(err).exit_code()
		return 0

	result = evaluator.evaluate(fragment)
	if args.json:
		payload = {
			"exit_code": result.exit_code(),
			"kind": result.kind,
			"output": result.output,
			"diagnostics": [d.to_json() for d in result.diagnostics()],
		}
		print(json.dumps(payload))
		return result.exit_code()

	sys.stdout.write(result.output)
	name = _fragment_name(args)
	for diag in result.diagnostics():
		print(f"{diag.span.format(default_file=name)}: {diag.severity}: {diag.message}", file=sys.stderr)
		for note in diag.notes:
			print(f"\t{note}", file=sys.stderr)
	return result.exit_code()


if __name__ == "__main__":
	sys.exit(main())
