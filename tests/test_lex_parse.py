from textwrap import dedent

from inventory.config import ScanConfig
from inventory.lex_parse import (
	extract_code_blocks,
	extract_file,
	extract_reference_targets,
	find_block_end,
	normalize_code,
	read_source,
	resolve_scope,
)


def test_find_block_end_matches_nested_braces():
	text = "a { b { c } d } e"
	assert find_block_end(text, 0) == text.rindex("}")
	assert find_block_end(text, 4) == text.index("}")


def test_find_block_end_without_or_unbalanced_braces():
	assert find_block_end("no braces here", 0) is None
	text = "f() { {"
	assert find_block_end(text, 0) == text.index("{")


def test_normalize_code():
	code = "function a() { // note\n  return 'x';\n}"
	assert normalize_code(code) == 'function a() { return "x"; }'


def test_extract_code_blocks_kinds():
	text = (
		"class Dog extends Animal {\n"
		"  bark() {\n"
		"    return 'woof';\n"
		"  }\n"
		"}\n"
		"function helper(a) { return a; }\n"
	)
	blocks = {(b.kind, b.name): b for b in extract_code_blocks(text)}
	assert set(blocks) == {("class", "Dog"), ("method", "bark"), ("function", "helper")}
	helper = blocks[("function", "helper")]
	assert text[helper.start:helper.end + 1] == "function helper(a) { return a; }"
	assert blocks[("class", "Dog")].end == text.index("}\nfunction")


def test_extract_code_blocks_truncates_text():
	text = "function long() { " + "x = 1; " * 100 + "}"
	(block,) = extract_code_blocks(text, max_chars=50)
	assert len(block.text) == 50


def test_most_specific_scope_wins():
	text = (
		"function outer() {\n"
		"  class Inner {\n"
		"    run() {\n"
		"      const x = 1;\n"
		"    }\n"
		"  }\n"
		"  let y = 2;\n"
		"}\n"
		"class Box {\n"
		"  var hidden = 2;\n"
		"}\n"
		"var z = 3;\n"
	)
	result = extract_file(text)
	scopes = {v.name: v.scope for v in result.variables}
	assert scopes == {"x": "method", "y": "function", "hidden": "class", "z": "global"}


def test_resolve_scope_nested_functions():
	blocks = extract_code_blocks("function a() { function b() { var q; } }")
	inner = min(blocks, key=lambda b: b.span)
	assert inner.name == "b"
	offset = blocks[0].text.index("var")
	assert resolve_scope(offset, blocks) == "function"
	assert resolve_scope(10_000, blocks) == "global"


def test_method_pattern_matches_control_flow():
	text = "function f() {\n  if (ready) {\n    go();\n  }\n}\n"
	result = extract_file(text)
	assert result.methods == ["if"]
	assert result.functions == ["f"]


def test_flat_name_lists():
	text = dedent(
		"""
		class A {}
		class B extends A {}
		function one() {}
		const two = function three() {};
		"""
	)
	result = extract_file(text)
	assert result.classes == ["A", "B"]
	assert result.functions == ["one", "three"]
	assert [v.name for v in result.variables] == ["two"]


def test_extract_reference_targets():
	text = dedent(
		"""
		import React from 'react';
		import "../shared/util";
		const pkg = require( "@org/pkg" );
		const lazy = () => import(`./lazy`);
		const again = require('react');
		"""
	)
	assert extract_reference_targets(text) == ["react", "../shared/util", "./lazy", "@org/pkg"]


def test_read_source_skips_unparseable_files(tmp_path):
	config = ScanConfig(max_file_size=64)
	good = tmp_path / "ok.js"
	good.write_text("var a = 1;")
	image = tmp_path / "logo.png"
	image.write_text("not really a png")
	empty = tmp_path / "empty.js"
	empty.write_text("")
	big = tmp_path / "big.js"
	big.write_text("x" * 65)
	binary = tmp_path / "blob.js"
	binary.write_bytes(b"\xff\xfe\x00bad")

	assert read_source(str(good), config) == "var a = 1;"
	assert read_source(str(image), config) is None
	assert read_source(str(empty), config) is None
	assert read_source(str(big), config) is None
	assert read_source(str(binary), config) is None
	assert read_source(str(tmp_path / "missing.js"), config) is None
