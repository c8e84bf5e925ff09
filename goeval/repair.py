# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Spot inferred imports that the compiler rejected.

Import inference guesses from `name.` usage, so it can import a package whose
name collides with a user declaration, or one the fragment never actually
dereferences (the qualifier was inside a string the lexer could not skip).
Go reports both, and the messages name the package, which is enough to drop
the guess and rebuild once.

Message shapes (old gc and current types2 front-ends):

	x redeclared as imported package name
	imported and not used: "math/rand"
	"math/rand" imported and not used
	"math/rand" imported as rnd and not used
	rand already declared through import of package rand ("math/rand")
"""

from __future__ import annotations

import re
from typing import AbstractSet

from goeval.imports import package_name

_REJECTED_IMPORT = re.compile(
	r"(?P<redeclared>\w+) redeclared as imported package name"
	r'|imported and not used: "(?P<unused_old>[^"]+)"'
	r'|"(?P<unused>[^"]+)" imported (?:as \w+ )?and not used'
	r'|\w+ already declared through import of package \w+ \("(?P<declared>[^"]+)"\)'
)


def _matches_import(name: str, path: str) -> bool:
	"""A reported name refers to `path` when it is the path or its package name."""
	return name == path or package_name(path) == name


def removable_imports(diagnostic: str, imports: AbstractSet[str]) -> set[str]:
	"""Return the members of `imports` the diagnostic blames."""
	blamed: set[str] = set()
	for m in _REJECTED_IMPORT.finditer(diagnostic):
		name = next(g for g in m.groups() if g)
		blamed.update(path for path in imports if _matches_import(name, path))
	return blamed


__all__ = ["removable_imports"]
