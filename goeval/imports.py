# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Infer the standard-library imports a fragment needs.

Any lowercase identifier used as a qualifier (`strings.Split`) is looked up
in a short-name -> import-path registry. Unknown names are ignored: they are
usually local variables or struct values, and an under-import surfaces as an
ordinary "undefined" diagnostic. Over-imports (a registry name that turns out
to be a local) are repaired later from compiler feedback (see `goeval.repair`).
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from goeval.lexer import Token, TokenizeError, tokenize

Registry = Mapping[str, str]

DEFAULT_REGISTRY_PATH = Path(__file__).with_name("go_packages.json")

# Raw-text fallback when the fragment does not tokenize.
_QUALIFIER = re.compile(r"(?<![\w.])([a-z]\w*)\.")
_IMPORT_DECL = re.compile(r"\s*import\b")
_IMPORT_PATH = re.compile(r'"([^"\n]+)"')
# Optional alias (or the `import` keyword itself) followed by a quoted path.
_IMPORT_SPEC = re.compile(r'(?:([\w.]+)[ \t]+)?"([^"\n]+)"')
_MAJOR_VERSION = re.compile(r"v[0-9]+")


def load_registry(path: Path | None = None) -> Registry:
	"""Load a registry JSON object (`{"short": "import/path"}`) as a read-only map."""
	path = path or DEFAULT_REGISTRY_PATH
	data = json.loads(path.read_text())
	if not isinstance(data, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
		raise ValueError(f"{path}: import registry must be a JSON object of strings")
	return MappingProxyType(dict(data))


def _qualifiers_from_tokens(tokens: Sequence[Token]) -> Iterable[str]:
	for idx, tok in enumerate(tokens[:-1]):
		if tok.type != "IDENT" or tokens[idx + 1].type != "DOT":
			continue
		if idx > 0 and tokens[idx - 1].type == "DOT":
			continue  # selector on a selector: `a.fmt.X`
		if tok.value[:1].islower():
			yield tok.value


def qualifiers(text: str) -> list[str]:
	"""Identifiers used as `name.` qualifiers, in source order (with repeats)."""
	try:
		tokens = tokenize(text)
	except TokenizeError:
		return _QUALIFIER.findall(text)
	return list(_qualifiers_from_tokens(tokens))


def infer_imports(text: str, registry: Registry) -> set[str]:
	"""Return the set of import paths the fragment's qualifiers resolve to."""
	inferred: set[str] = set()
	for name in qualifiers(text):
		path = registry.get(name)
		if path is not None:
			inferred.add(path)
	return inferred


def is_import_chunk(chunk: str) -> bool:
	return _IMPORT_DECL.match(chunk) is not None


def explicit_imports(declarations: Iterable[str]) -> set[str]:
	"""Import paths declared by `import` chunks (`import "x"` or `import (...)`)."""
	paths: set[str] = set()
	for chunk in declarations:
		if is_import_chunk(chunk):
			paths.update(_IMPORT_PATH.findall(chunk))
	return paths


def package_name(path: str) -> str:
	"""The name an import path binds by default: its last element (`math/rand/v2` -> `rand`)."""
	parts = path.split("/")
	if len(parts) > 1 and _MAJOR_VERSION.fullmatch(parts[-1]):
		return parts[-2]
	return parts[-1]


def explicit_import_names(declarations: Iterable[str]) -> set[str]:
	"""
	Package names bound by `import` chunks: the alias when one is given,
	otherwise the default name of the path. Blank (`_`) and dot imports bind
	no qualifier and are skipped.
	"""
	names: set[str] = set()
	for chunk in declarations:
		if not is_import_chunk(chunk):
			continue
		for alias, path in _IMPORT_SPEC.findall(chunk):
			if alias in ("", "import"):
				names.add(package_name(path))
			elif alias not in ("_", "."):
				names.add(alias)
	return names


__all__ = [
	"DEFAULT_REGISTRY_PATH",
	"Registry",
	"explicit_import_names",
	"explicit_imports",
	"infer_imports",
	"is_import_chunk",
	"load_registry",
	"package_name",
	"qualifiers",
]
