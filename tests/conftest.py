"""
Shared pytest fixtures for the pubscan test suite.

Provides helpers that lay out small Rust source trees under tmp_path and
extract single snippets, so tests read as "this source yields these
records".

Usage in tests:
    def test_something(rust_tree):
        root = rust_tree({"src/lib.rs": "pub fn a() {}"})
        result = Scanner().scan(root)

    def test_snippet(extract):
        inv = extract("pub struct S { x: i32 }")
        assert inv.names(DeclarationKind.STRUCT) == ["S"]
"""

import textwrap

import pytest


@pytest.fixture
def rust_tree(tmp_path):
    """
    Write a tree of source files and return its root.

    Keys are root-relative paths, values file contents (dedented).
    Bytes values are written verbatim.

    Example:
        root = rust_tree({"lib.rs": "pub fn a() {}", "bad.rs": "fn ("})
    """
    def write(files):
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(textwrap.dedent(content), encoding="utf-8")
        return tmp_path

    return write


@pytest.fixture
def extract():
    """
    Parse a Rust snippet and return its FileInventory.

    Requires tree-sitter; use in tests marked requires_tree_sitter.

    Example:
        inv = extract("pub mod m { pub fn f() {} }")
    """
    from pubscan.core.parsing import TreeParser, DeclarationExtractor
    from pubscan.core.parsing.languages import RUST_CONFIG

    def run(source, file_path="lib.rs"):
        data = textwrap.dedent(source).encode("utf-8")
        tree = TreeParser(RUST_CONFIG).parse(data)
        return DeclarationExtractor(RUST_CONFIG).extract(tree, data, file_path)

    return run
