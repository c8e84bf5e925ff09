# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from goeval.imports import explicit_import_names, explicit_imports, infer_imports, load_registry, package_name, qualifiers
from goeval.lexer import TokenizeError, tokenize


@pytest.fixture(scope="module")
def registry():
	return load_registry()


def test_fmt_is_inferred(registry) -> None:
	assert infer_imports('fmt.Println("hi")', registry) == {"fmt"}


def test_short_names_resolve_to_full_paths(registry) -> None:
	src = "r := rand.Intn(10)\nb, _ := json.Marshal(r)\nos.Stdout.Write(b)\n"
	assert infer_imports(src, registry) == {"math/rand", "encoding/json", "os"}


def test_duplicates_collapse(registry) -> None:
	assert infer_imports("strings.ToUpper(strings.TrimSpace(s))", registry) == {"strings"}


def test_unknown_qualifiers_are_ignored(registry) -> None:
	assert infer_imports("p.X = point.Y + cfg.Z", registry) == set()


def test_qualifier_inside_string_is_not_an_import(registry) -> None:
	assert infer_imports('s := "foo.bar"', registry) == set()
	assert infer_imports('s := "strings.Split"', registry) == set()


def test_comments_and_raw_strings_are_skipped(registry) -> None:
	src = "// uses os.Args\nx := `time.Now()`\n/* sort.Ints */ y := 1\n"
	assert infer_imports(src, registry) == set()


def test_field_selector_chain_is_not_a_qualifier() -> None:
	assert qualifiers("cfg.fmt.Value") == ["cfg"]


def test_untokenizable_fragment_falls_back_to_regex(registry) -> None:
	# Unterminated string literal: the lexer gives up, the raw scan still finds fmt.
	src = 'fmt.Println("oops\n'
	with pytest.raises(TokenizeError):
		tokenize(src)
	assert infer_imports(src, registry) == {"fmt"}


def test_tokenize_drops_comments() -> None:
	toks = tokenize("x := 1 // note\n")
	assert [t.type for t in toks] == ["IDENT", "PUNCT", "PUNCT", "NUMBER"]


def test_explicit_imports_from_declaration_chunks() -> None:
	chunks = [
		'import "os"//#1\n',
		'import (//#2\n\t"fmt"//#3\n\tstr "strings"//#4\n)//#5\n',
		'type A struct {//#6\n\tS string `json:"s"`//#7\n}//#8\n',
	]
	assert explicit_imports(chunks) == {"os", "fmt", "strings"}


def test_explicit_import_names_use_aliases() -> None:
	chunks = [
		'import "crypto/rand"//#1\n',
		'import (//#2\n\tstr "strings"//#3\n\t_ "embed"//#4\n\t. "math"//#5\n\t"math/rand/v2"//#6\n)//#7\n',
		"x := 1//#8\n",
	]
	assert explicit_import_names(chunks) == {"rand", "str"}


def test_package_name_is_the_last_path_element() -> None:
	assert package_name("fmt") == "fmt"
	assert package_name("container/list") == "list"
	assert package_name("math/rand/v2") == "rand"


def test_registry_is_read_only(registry) -> None:
	with pytest.raises(TypeError):
		registry["fmt"] = "other"  # type: ignore[index]


def test_custom_registry_file(tmp_path: Path) -> None:
	path = tmp_path / "pkgs.json"
	path.write_text(json.dumps({"yaml": "gopkg.in/yaml.v3"}))
	reg = load_registry(path)
	assert infer_imports("yaml.Marshal(v)\nfmt.Println()", reg) == {"gopkg.in/yaml.v3"}


def test_malformed_registry_is_rejected(tmp_path: Path) -> None:
	path = tmp_path / "pkgs.json"
	path.write_text(json.dumps(["fmt"]))
	with pytest.raises(ValueError):
		load_registry(path)
