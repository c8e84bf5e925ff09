# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from goeval.repair import removable_imports


@pytest.mark.parametrize(
	"diagnostic, blamed",
	[
		('./main.go:4:2: "os" imported and not used\n', {"os"}),
		('./main.go:4:2: imported and not used: "os"\n', {"os"}),
		('./main.go:3:2: "math/rand" imported and not used\n', {"math/rand"}),
		('./main.go:3:2: "math/rand" imported as rnd and not used\n', {"math/rand"}),
		("./main.go:9:6: rand redeclared as imported package name\n", {"math/rand"}),
		(
			'./main.go:9:6: list already declared through import of package list ("container/list")\n'
			"\t./main.go:3:8: other declaration of list\n",
			{"container/list"},
		),
	],
)
def test_rejected_import_shapes(diagnostic: str, blamed: set[str]) -> None:
	imports = {"os", "math/rand", "container/list", "strings"}
	assert removable_imports(diagnostic, imports) == blamed


def test_only_inferred_imports_are_blamed() -> None:
	diag = './main.go:4:2: "os" imported and not used\n'
	assert removable_imports(diag, {"strings"}) == set()


def test_unrelated_diagnostics_blame_nothing() -> None:
	diag = "./main.go:8:2: undefined: x\n./main.go:9:2: declared and not used: y\n"
	assert removable_imports(diag, {"fmt", "os"}) == set()


def test_multiple_rejections_in_one_run() -> None:
	diag = (
		'./main.go:3:2: "os" imported and not used\n'
		'./main.go:4:2: "time" imported and not used\n'
	)
	assert removable_imports(diag, {"os", "time", "sort"}) == {"os", "time"}
