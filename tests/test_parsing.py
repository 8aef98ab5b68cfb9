"""
Tests for Parsing Module — Public declaration extraction.

Tests validate:
- LanguageConfig and DeclarationQuery dataclasses
- ParserRegistry extension routing
- Exclusion globs
- TreeParser parse failures (when available)
- DeclarationExtractor over Rust sources (when available)

Core tests work WITHOUT tree-sitter-language-pack installed.
Tree-sitter dependent tests are marked and skipped when unavailable.
"""

import pytest
from pathlib import Path

from pubscan.core.inventory import DeclarationKind, OPAQUE_NAME

# Check if tree-sitter-language-pack is available
try:
    import tree_sitter_language_pack  # noqa: F401
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

# Skip marker for tree-sitter dependent tests
requires_tree_sitter = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE,
    reason="tree-sitter-language-pack not installed"
)


# =============================================================================
# LanguageConfig Tests
# =============================================================================

class TestLanguageConfig:
    """Test LanguageConfig dataclass."""

    def test_create_basic_config(self):
        """Can create a basic language config."""
        from pubscan.core.parsing import LanguageConfig, DeclarationQuery

        config = LanguageConfig(
            name="TestLang",
            tree_sitter_name="test",
            extensions={'.test'},
            declaration_queries=[
                DeclarationQuery(node_type="function", kind=DeclarationKind.FUNCTION)
            ],
        )

        assert config.name == "TestLang"
        assert '.test' in config.extensions
        assert config.query_map()["function"].kind is DeclarationKind.FUNCTION

    def test_unknown_scope_rejected(self):
        from pubscan.core.parsing import DeclarationQuery

        with pytest.raises(ValueError):
            DeclarationQuery(node_type="x", kind=DeclarationKind.FUNCTION, scope="nested")

    def test_rust_config_marks_cargo_target(self):
        from pubscan.core.parsing.languages import RUST_CONFIG

        assert RUST_CONFIG.build_dirs == {'target': 'Cargo.toml'}
        assert not any('target' in p for p in RUST_CONFIG.exclude_patterns)


# =============================================================================
# ParserRegistry Tests
# =============================================================================

class TestParserRegistry:
    """Test extension routing."""

    def test_default_registry_routes_rust(self):
        from pubscan.core.parsing import create_default_registry

        registry = create_default_registry()

        assert registry.is_supported(Path("src/lib.rs"))
        assert registry.is_supported(Path("MAIN.RS"))
        assert not registry.is_supported(Path("build.py"))
        assert registry.get_config(Path("a.rs")).name == "Rust"
        assert registry.get_config(Path("a.txt")) is None
        assert "Rust" in registry
        assert len(registry) == 1

    def test_extension_override(self):
        from pubscan.core.parsing import create_default_registry

        registry = create_default_registry([".rs", ".RSI"])

        assert registry.is_supported(Path("a.rsi"))
        assert registry.is_supported(Path("a.rs"))

    def test_conflicting_extension(self):
        from pubscan.core.parsing import ParserRegistry, LanguageConfig

        registry = ParserRegistry()
        registry.register(LanguageConfig(name="A", tree_sitter_name="a", extensions={'.x'}))

        with pytest.raises(ValueError):
            registry.register(LanguageConfig(name="B", tree_sitter_name="b", extensions={'.x'}))

    def test_exclude_patterns_merged(self):
        from pubscan.core.parsing import create_default_registry

        patterns = create_default_registry().all_exclude_patterns()

        assert '**/.git/*' in patterns
        assert patterns == sorted(patterns)

    def test_build_dirs_merged(self):
        from pubscan.core.parsing import create_default_registry

        assert create_default_registry().all_build_dirs() == {'target': 'Cargo.toml'}


# =============================================================================
# Exclusion Tests
# =============================================================================

class TestExclusions:
    """Test exclude globs."""

    def test_default_patterns_include_common(self):
        from pubscan.core.parsing import default_patterns

        patterns = default_patterns('rust')

        assert '**/.git/*' in patterns
        assert patterns == sorted(patterns)

    def test_unknown_language_gets_common_only(self):
        from pubscan.core.parsing import default_patterns
        from pubscan.core.parsing.exclusions import build_dirs

        assert default_patterns('cobol') == default_patterns('rust')
        assert build_dirs('cobol') == {}

    def test_matches_at_any_depth(self):
        from pubscan.core.parsing import ExclusionSet

        excluded = ExclusionSet(['**/target/*'])

        assert excluded.matches('target/')
        assert excluded.matches('crates/a/target/debug/x.rs')
        assert not excluded.matches('src/targets.rs')

    def test_rooted_pattern(self):
        from pubscan.core.parsing import ExclusionSet

        excluded = ExclusionSet(['/vendor/*'])

        assert excluded.matches('vendor/lib.rs')
        assert not excluded.matches('src/vendor/lib.rs')

    def test_deduplicated(self):
        from pubscan.core.parsing import ExclusionSet

        excluded = ExclusionSet(['**/gen/*', '', '**/gen/*'])
        excluded.extend(['**/gen/*', '**/out/*'])

        assert excluded.patterns == ['**/gen/*', '**/out/*']
        assert len(excluded) == 2


# =============================================================================
# TreeParser Tests
# =============================================================================

@requires_tree_sitter
class TestTreeParser:
    """Test syntax validation."""

    def test_valid_source(self):
        from pubscan.core.parsing import TreeParser
        from pubscan.core.parsing.languages import RUST_CONFIG

        tree = TreeParser(RUST_CONFIG).parse(b"pub fn a() {}\n")

        assert tree.root_node.type == "source_file"

    def test_invalid_source_raises(self):
        from pubscan.core.errors import ParseFailure
        from pubscan.core.parsing import TreeParser
        from pubscan.core.parsing.languages import RUST_CONFIG

        with pytest.raises(ParseFailure) as exc_info:
            TreeParser(RUST_CONFIG).parse(b"pub fn ok() {}\npub fn broken( {\n")

        assert exc_info.value.line is not None
        assert exc_info.value.line >= 2
        assert "line" in str(exc_info.value)

    def test_empty_source(self):
        from pubscan.core.parsing import TreeParser
        from pubscan.core.parsing.languages import RUST_CONFIG

        tree = TreeParser(RUST_CONFIG).parse(b"")

        assert tree.root_node.named_child_count == 0


# =============================================================================
# Extraction Scenarios
# =============================================================================

@requires_tree_sitter
class TestScenarios:
    """End-to-end snippets from source text to records."""

    def test_single_public_function(self, extract):
        inv = extract("pub fn a() {}")

        assert inv.kinds() == [DeclarationKind.FUNCTION]
        assert inv.names(DeclarationKind.FUNCTION) == ["a"]
        assert inv.records(DeclarationKind.FUNCTION)[0].line == 1

    def test_struct_fields(self, extract):
        inv = extract("pub struct S { pub x: i32 }")

        (struct,) = inv.records(DeclarationKind.STRUCT)
        assert struct.name == "S"
        assert struct.fields == {"x": "i32"}

    def test_trait_and_trait_impl(self, extract):
        """Trait member and implementing method are two TraitFn records."""
        inv = extract("""
            pub trait T { fn m(&self); }
            struct S;
            impl T for S { fn m(&self) {} }
        """)

        assert inv.names(DeclarationKind.TRAIT) == ["T"]
        assert inv.names(DeclarationKind.TRAIT_FUNCTION) == ["T::m", "T::m"]
        lines = [r.line for r in inv.records(DeclarationKind.TRAIT_FUNCTION)]
        assert lines == [2, 4]

    def test_module_is_flattened(self, extract):
        inv = extract("pub mod inner { pub fn f() {} }")

        assert inv.names(DeclarationKind.MODULE) == ["inner"]
        assert inv.names(DeclarationKind.FUNCTION) == ["f"]
        assert len(inv) == 2


@requires_tree_sitter
class TestVisibility:
    """Only plain `pub` counts."""

    def test_private_items_excluded(self, extract):
        inv = extract("""
            fn private() {}
            pub(crate) fn crate_only() {}
            pub(super) struct Up;
            pub(in crate::a) const C: u8 = 0;
            pub fn visible() {}
        """)

        assert inv.names(DeclarationKind.FUNCTION) == ["visible"]
        assert DeclarationKind.STRUCT not in inv
        assert DeclarationKind.CONSTANT not in inv

    def test_private_module_body_not_walked(self, extract):
        inv = extract("""
            mod hidden {
                pub fn not_reachable() {}
            }
        """)

        assert len(inv) == 0

    def test_nested_public_modules(self, extract):
        inv = extract("""
            pub mod outer {
                pub mod inner {
                    pub fn deep() {}
                }
                fn private() {}
            }
            pub mod declared;
        """)

        assert inv.names(DeclarationKind.MODULE) == ["outer", "inner", "declared"]
        assert inv.names(DeclarationKind.FUNCTION) == ["deep"]

    def test_trait_members_ignore_visibility(self, extract):
        inv = extract("""
            pub trait Shape {
                fn area(&self) -> f64;
                fn name(&self) -> String { String::new() }
            }
        """)

        assert inv.names(DeclarationKind.TRAIT_FUNCTION) == ["Shape::area", "Shape::name"]

    def test_private_trait_excluded_with_members(self, extract):
        inv = extract("trait Hidden { fn m(&self); }")

        assert len(inv) == 0


@requires_tree_sitter
class TestImplBlocks:
    """Inherent and trait impl naming."""

    def test_inherent_public_methods_unqualified(self, extract):
        inv = extract("""
            pub struct S;
            impl S {
                pub fn new() -> Self { S }
                fn helper(&self) {}
                pub(crate) fn internal(&self) {}
            }
        """)

        assert inv.names(DeclarationKind.FUNCTION) == ["new"]
        assert DeclarationKind.TRAIT_FUNCTION not in inv

    def test_trait_and_inherent_do_not_collide(self, extract):
        inv = extract("""
            pub struct S;
            impl S { pub fn render(&self) {} }
            impl Render for S { fn render(&self) {} }
        """)

        assert inv.names(DeclarationKind.FUNCTION) == ["render"]
        assert inv.names(DeclarationKind.TRAIT_FUNCTION) == ["Render::render"]

    def test_duplicates_across_impl_blocks_kept(self, extract):
        inv = extract("""
            pub struct A;
            pub struct B;
            impl A { pub fn new() -> Self { A } }
            impl B { pub fn new() -> Self { B } }
        """)

        assert inv.names(DeclarationKind.FUNCTION) == ["new", "new"]

    def test_trait_path_and_generics_dropped(self, extract):
        inv = extract("""
            pub struct W<T>(T);
            impl<T> From<T> for W<T> { fn from(t: T) -> Self { W(t) } }
            impl std::fmt::Display for W<u8> {
                fn fmt(&self, f: &mut std::fmt::Formatter) -> std::fmt::Result { Ok(()) }
            }
        """)

        assert inv.names(DeclarationKind.TRAIT_FUNCTION) == ["From::from", "Display::fmt"]


@requires_tree_sitter
class TestFieldsAndVariants:
    """Field maps of structs, unions and enums."""

    def test_tuple_struct_positional_fields(self, extract):
        inv = extract("pub struct P(pub i32, String);")

        (point,) = inv.records(DeclarationKind.STRUCT)
        assert point.fields == {"0": "i32", "1": "String"}

    def test_fields_listed_regardless_of_field_visibility(self, extract):
        inv = extract("""
            pub struct Conf {
                pub name: String,
                secret: Vec<u8>,
                pub(crate) map: HashMap<String,   u32>,
            }
        """)

        (conf,) = inv.records(DeclarationKind.STRUCT)
        assert conf.fields == {
            "name": "String",
            "secret": "Vec<u8>",
            "map": "HashMap<String, u32>",
        }

    def test_unit_struct_has_empty_fields(self, extract):
        inv = extract("#[derive(Debug)]\npub struct Marker;")

        (marker,) = inv.records(DeclarationKind.STRUCT)
        assert marker.fields == {}

    def test_union_fields(self, extract):
        inv = extract("pub union U { i: u32, f: f32 }")

        (union,) = inv.records(DeclarationKind.UNION)
        assert union.fields == {"i": "u32", "f": "f32"}

    def test_enum_variants(self, extract):
        inv = extract("""
            pub enum E {
                A,
                B(i32, u8),
                C { x: i32 },
                D = 4,
            }
        """)

        (enum,) = inv.records(DeclarationKind.ENUM)
        assert enum.fields == {"A": "", "B": "(i32, u8)", "C": "{ x: i32 }", "D": "= 4"}
        assert len(inv) == 1


@requires_tree_sitter
class TestOtherItems:
    """Remaining item kinds."""

    def test_constants_statics_aliases(self, extract):
        inv = extract("""
            pub const MAX: usize = 10;
            pub static NAME: &str = "x";
            pub type Result<T> = std::result::Result<T, Error>;
            pub extern crate core;
        """)

        assert inv.names(DeclarationKind.CONSTANT) == ["MAX"]
        assert inv.names(DeclarationKind.STATIC) == ["NAME"]
        assert inv.names(DeclarationKind.TYPE_ALIAS) == ["Result"]
        assert inv.names(DeclarationKind.EXTERN_CRATE) == ["core"]

    def test_foreign_block(self, extract):
        inv = extract("""
            extern "C" {
                pub fn c_call(x: i32) -> i32;
                pub static ERRNO: i32;
                fn hidden();
            }
        """)

        assert inv.names(DeclarationKind.FOREIGN_FUNCTION) == ["c_call"]
        assert inv.names(DeclarationKind.STATIC) == ["ERRNO"]
        assert DeclarationKind.FUNCTION not in inv

    def test_use_trees(self, extract):
        inv = extract("""
            pub use std::collections::{HashMap, BTreeMap as Map};
            pub use crate::prelude::*;
            pub use std :: io;
            use std::fmt;
        """)

        assert inv.names(DeclarationKind.USE) == [
            "std::collections::{HashMap,BTreeMap as Map}",
            "crate::prelude::*",
            "std::io",
        ]

    def test_macros(self, extract):
        inv = extract("""
            macro_rules! square {
                ($x:expr) => { $x * $x };
            }
            lazy_static! {
                static ref TABLE: u8 = 0;
            }
        """)

        assert inv.names(DeclarationKind.MACRO) == ["square", "lazy_static"]

    def test_scoped_macro_uses_last_segment(self, extract):
        inv = extract("foo::bar! { x }")

        assert inv.names(DeclarationKind.MACRO) == ["bar"]

    def test_opaque_fragments(self, extract):
        inv = extract("""
            fn nobody();
            let x = 5;
        """)

        opaque = inv.records(DeclarationKind.OPAQUE)
        assert [r.name for r in opaque] == [OPAQUE_NAME, OPAQUE_NAME]
        assert [r.line for r in opaque] == [2, 3]

    def test_records_carry_file_path(self, extract):
        inv = extract("pub fn a() {}\npub struct S;", file_path="src/x.rs")

        assert all(r.file_path == "src/x.rs" for r in inv.all_records())

    def test_comments_and_attributes_ignored(self, extract):
        inv = extract("""
            //! crate docs
            #![allow(dead_code)]
            /// doc comment
            #[inline]
            pub fn documented() {}
        """)

        assert inv.names(DeclarationKind.FUNCTION) == ["documented"]
        assert len(inv) == 1
