# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from goeval.chunker import iter_chunks, next_chunk
from goeval.core.errors import StructuralError
from goeval.line_map import embed_line_numbers


def test_single_lines_are_chunks() -> None:
	text = embed_line_numbers("x := 1\ny := 2\n")
	assert list(iter_chunks(text)) == ["x := 1//#1\n", "y := 2//#2\n"]


def test_block_runs_to_balancing_brace() -> None:
	text = embed_line_numbers("if x > 0 {\n\tfmt.Println(x)\n}\ny := 2\n")
	chunks = list(iter_chunks(text))
	assert chunks[0] == "if x > 0 {//#1\n\tfmt.Println(x)//#2\n}//#3\n"
	assert chunks[1] == "y := 2//#4\n"


def test_nested_braces_are_counted() -> None:
	src = "func f() {\n\tif true {\n\t\tfor {\n\t\t}\n\t}\n}\nf()\n"
	chunks = list(iter_chunks(embed_line_numbers(src)))
	assert len(chunks) == 2
	assert chunks[1] == "f()//#7\n"


def test_paren_block_only_counts_parens() -> None:
	src = "import (\n\t\"fmt\"\n\t\"os\"\n)\nx := 1\n"
	chunks = list(iter_chunks(embed_line_numbers(src)))
	assert chunks[0].startswith("import (//#1\n")
	assert chunks[0].endswith(")//#4\n")
	assert chunks[1] == "x := 1//#5\n"


def test_closer_line_tail_stays_with_block() -> None:
	"""An immediately-invoked closure keeps its `}()` on the block chunk."""
	src = "func() {\n\tp(1)\n}()\nz := 3\n"
	chunks = list(iter_chunks(embed_line_numbers(src)))
	assert chunks[0].endswith("}()//#3\n")
	assert chunks[1] == "z := 3//#4\n"


def test_trailing_blank_line_joins_block() -> None:
	src = "type A struct {\n\tV int\n}\n\nx := A{}\n"
	chunks = list(iter_chunks(embed_line_numbers(src)))
	assert chunks[0].endswith("}//#3\n//#4\n")
	assert chunks[1] == "x := A{}//#5\n"


def test_brace_inside_string_is_counted() -> None:
	# Known limitation: literals are not tokenized, so this `{` needs a partner.
	src = 'if ok {\n\ts := "{"\n}\n'
	with pytest.raises(StructuralError):
		list(iter_chunks(embed_line_numbers(src)))


def test_unbalanced_brace_reports_opening_line() -> None:
	src = "x := 1\nfor i := 0; i < 3; i++ {\n\tp(i)\n"
	with pytest.raises(StructuralError) as excinfo:
		list(iter_chunks(embed_line_numbers(src)))
	assert excinfo.value.line == 2
	assert "mismatched brackets" in excinfo.value.message


def test_newline_only_and_end_of_input() -> None:
	assert next_chunk("\nabc") == "\n"
	assert next_chunk("abc") == "abc"
	assert next_chunk("abc\n", 4) == ""


@pytest.mark.parametrize(
	"src",
	[
		"p 1\n",
		"type T struct {\n\tA, B int\n}\nfunc (t T) Sum() int {\n\treturn t.A + t.B\n}\nfmt.Println(T{1, 2}.Sum())\n",
		"x := []int{\n\t1,\n\t2,\n}\n\n\nfor _, v := range x {\n\tif v > 1 {\n\t\tp(v)\n\t}\n}",
		"\n\n\n",
	],
)
def test_chunks_reconstruct_input(src: str) -> None:
	text = embed_line_numbers(src)
	assert "".join(iter_chunks(text)) == text
