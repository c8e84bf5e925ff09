# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared records for the goeval pipeline: spans, diagnostics, errors, results.
"""

__all__ = ["diagnostics", "errors", "result", "span"]
