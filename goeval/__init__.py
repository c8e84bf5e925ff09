# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
goeval: run Go fragments without writing the `package main` boilerplate.

Pipeline:
  alias expansion -> import inference -> line-marker embedding
    -> chunking/partitioning -> assembly -> `go run` -> one-shot import repair

The entry point is `goeval.evalc.evaluate`; the CLI lives in
`goeval.evalc:main` (`python -m goeval`).
"""

from goeval.evalc import Evaluator, evaluate
from goeval.core.result import EvalResult

__all__ = ["Evaluator", "EvalResult", "evaluate"]
