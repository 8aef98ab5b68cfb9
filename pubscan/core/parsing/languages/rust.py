"""
Rust language configuration for declaration extraction.

Defines RUST_CONFIG with tree-sitter-rust node types and the hooks that
turn syntax into inventory entries.

Declaration kinds extracted:
- Fn, Struct, Enum, Trait, Mod, Const, Static, Type, Union, ExternCrate:
  items carrying a plain `pub` modifier
- TraitFn: members of public traits and of trait impl blocks
- ForeignFn: `pub fn` signatures inside `extern` blocks
- Use: `pub use` re-exports, by stringified use tree
- Macro: item-level macro invocations and `macro_rules!` definitions
- Opaque: item-level fragments that are not item syntax
"""

from typing import Dict, Optional, TYPE_CHECKING

from ...inventory import DeclarationKind
from ..config import (
    LanguageConfig,
    DeclarationQuery,
    SCOPE_FIELDS,
    SCOPE_VARIANTS,
    SCOPE_DECLARATIONS,
    SCOPE_TRAIT,
    SCOPE_IMPL,
    SCOPE_FOREIGN,
)
from ..nodes import node_text, field_text, strip_whitespace, collapse_whitespace
from ..exclusions import build_dirs, default_patterns

if TYPE_CHECKING:
    from tree_sitter import Node


PUBLIC = "pub"
PRIVATE = "private"

COMMENT_TYPES = {"line_comment", "block_comment"}


# =============================================================================
# Visibility
# =============================================================================

def rust_visibility_detector(node: 'Node', source: bytes) -> str:
    """
    Determine Rust item visibility.

    Returns the modifier with whitespace removed ("pub", "pub(crate)",
    "pub(super)", ...) or "private" when there is none.
    Only the bare "pub" form is public.
    """
    for child in node.children:
        if child.type == "visibility_modifier":
            return strip_whitespace(node_text(child, source))
    return PRIVATE


# =============================================================================
# Names
# =============================================================================

def last_path_segment(node: Optional['Node'], source: bytes) -> Optional[str]:
    """
    Last segment of a (type) path, generic arguments dropped.

    fmt::Display -> Display, From<u8> -> From, io::Write -> Write
    """
    if node is None:
        return None
    if node.type in ("scoped_type_identifier", "scoped_identifier"):
        return last_path_segment(node.child_by_field_name("name"), source)
    if node.type == "generic_type":
        return last_path_segment(node.child_by_field_name("type"), source)
    return strip_whitespace(node_text(node, source)) or None


def rust_trait_name(impl_node: 'Node', source: bytes) -> Optional[str]:
    """Trait implemented by an impl block, None for inherent impls."""
    return last_path_segment(impl_node.child_by_field_name("trait"), source)


def rust_macro_name(node: 'Node', source: bytes) -> Optional[str]:
    """Last segment of an invoked macro path (`foo::bar!` -> bar)."""
    return last_path_segment(node.child_by_field_name("macro"), source)


def format_use_tree(node: 'Node', source: bytes) -> str:
    """
    Stringify a use tree without whitespace inside paths.

    std :: io -> std::io
    a::{b, c::d} -> a::{b,c::d}
    a::b as c -> a::b as c
    a::* -> a::*
    """
    if node.type == "use_as_clause":
        path = strip_whitespace(field_text(node, "path", source) or "")
        alias = field_text(node, "alias", source) or ""
        return f"{path} as {alias}"

    if node.type == "use_list":
        parts = [
            format_use_tree(child, source)
            for child in node.named_children
            if child.type not in COMMENT_TYPES
        ]
        return "{" + ",".join(parts) + "}"

    if node.type == "scoped_use_list":
        path = node.child_by_field_name("path")
        items = node.child_by_field_name("list")
        prefix = strip_whitespace(node_text(path, source)) if path is not None else ""
        listed = format_use_tree(items, source) if items is not None else "{}"
        return f"{prefix}::{listed}"

    return strip_whitespace(node_text(node, source))


def rust_use_name(node: 'Node', source: bytes) -> Optional[str]:
    argument = node.child_by_field_name("argument")
    if argument is None:
        return None
    return format_use_tree(argument, source)


# =============================================================================
# Fields and variants
# =============================================================================

def field_map(body: Optional['Node'], source: bytes) -> Dict[str, str]:
    """
    Fields of a struct-like body in source order.

    Named fields map name -> type text; tuple fields map "0", "1", ...
    """
    fields: Dict[str, str] = {}
    if body is None:
        return fields

    if body.type == "field_declaration_list":
        for child in body.named_children:
            if child.type != "field_declaration":
                continue
            name = field_text(child, "name", source)
            if name:
                fields[name] = collapse_whitespace(field_text(child, "type", source) or "")

    elif body.type == "ordered_field_declaration_list":
        for index, type_node in enumerate(body.children_by_field_name("type")):
            fields[str(index)] = collapse_whitespace(node_text(type_node, source))

    return fields


def rust_field_collector(node: 'Node', source: bytes) -> Dict[str, str]:
    """Field map of a struct or union item."""
    return field_map(node.child_by_field_name("body"), source)


def variant_payload(variant: 'Node', source: bytes) -> str:
    """
    Payload text of one enum variant.

    Unit -> "", tuple -> "(i32, String)", struct -> "{ x: i32 }",
    with " = expr" appended for explicit discriminants.
    """
    body = variant.child_by_field_name("body")
    fields = field_map(body, source)

    payload = ""
    if body is not None and body.type == "ordered_field_declaration_list":
        payload = "(" + ", ".join(fields.values()) + ")"
    elif body is not None and body.type == "field_declaration_list":
        inner = ", ".join(f"{name}: {type_text}" for name, type_text in fields.items())
        payload = "{ " + inner + " }" if inner else "{}"

    value = variant.child_by_field_name("value")
    if value is not None:
        discriminant = "= " + collapse_whitespace(node_text(value, source))
        payload = f"{payload} {discriminant}" if payload else discriminant
    return payload


def rust_variant_collector(node: 'Node', source: bytes) -> Dict[str, str]:
    """Variant map of an enum item: variant name -> payload text."""
    variants: Dict[str, str] = {}
    body = node.child_by_field_name("body")
    if body is None:
        return variants
    for child in body.named_children:
        if child.type != "enum_variant":
            continue
        name = field_text(child, "name", source)
        if name:
            variants[name] = variant_payload(child, source)
    return variants


def rust_macro_unwrapper(node: 'Node') -> Optional['Node']:
    """Macro invocation wrapped in an item-level expression statement."""
    if node.type != "expression_statement":
        return None
    for child in node.named_children:
        if child.type == "macro_invocation":
            return child
    return None


# =============================================================================
# Declaration Queries
# =============================================================================

RUST_QUERIES = [
    # pub fn name() {}
    DeclarationQuery(node_type="function_item", kind=DeclarationKind.FUNCTION),
    # pub struct Name { field: Type } / pub struct Name(Type);
    DeclarationQuery(node_type="struct_item", kind=DeclarationKind.STRUCT, scope=SCOPE_FIELDS),
    # pub enum Name { Variant, ... }
    DeclarationQuery(node_type="enum_item", kind=DeclarationKind.ENUM, scope=SCOPE_VARIANTS),
    # pub union Name { field: Type }
    DeclarationQuery(node_type="union_item", kind=DeclarationKind.UNION, scope=SCOPE_FIELDS),
    # pub trait Name { fn member(&self); }
    DeclarationQuery(node_type="trait_item", kind=DeclarationKind.TRAIT, scope=SCOPE_TRAIT),
    # impl Type { ... } / impl Trait for Type { ... }
    DeclarationQuery(
        node_type="impl_item",
        kind=None,
        name_field=None,
        requires_public=False,
        scope=SCOPE_IMPL,
    ),
    # pub mod name { ... } / pub mod name;
    DeclarationQuery(node_type="mod_item", kind=DeclarationKind.MODULE, scope=SCOPE_DECLARATIONS),
    DeclarationQuery(node_type="const_item", kind=DeclarationKind.CONSTANT),
    DeclarationQuery(node_type="static_item", kind=DeclarationKind.STATIC),
    DeclarationQuery(node_type="type_item", kind=DeclarationKind.TYPE_ALIAS),
    # pub extern crate name;
    DeclarationQuery(node_type="extern_crate_declaration", kind=DeclarationKind.EXTERN_CRATE),
    # extern "C" { pub fn name(); }
    DeclarationQuery(
        node_type="foreign_mod_item",
        kind=None,
        name_field=None,
        requires_public=False,
        scope=SCOPE_FOREIGN,
    ),
    # pub use path::{a, b};
    DeclarationQuery(
        node_type="use_declaration",
        kind=DeclarationKind.USE,
        name_field=None,
        name_builder=rust_use_name,
    ),
    # name! { ... } at item level
    DeclarationQuery(
        node_type="macro_invocation",
        kind=DeclarationKind.MACRO,
        name_field=None,
        requires_public=False,
        name_builder=rust_macro_name,
    ),
    # macro_rules! name { ... }
    DeclarationQuery(
        node_type="macro_definition",
        kind=DeclarationKind.MACRO,
        requires_public=False,
    ),
]

RUST_FOREIGN_QUERIES = [
    DeclarationQuery(node_type="function_signature_item", kind=DeclarationKind.FOREIGN_FUNCTION),
    DeclarationQuery(node_type="static_item", kind=DeclarationKind.STATIC),
]


# =============================================================================
# Configuration
# =============================================================================

RUST_CONFIG = LanguageConfig(
    name="Rust",
    tree_sitter_name="rust",
    extensions={'.rs'},
    declaration_queries=RUST_QUERIES,
    foreign_queries=RUST_FOREIGN_QUERIES,
    trait_member_types={"function_item", "function_signature_item"},
    impl_member_types={"function_item"},
    # Item-level statements that are not item syntax
    opaque_types={
        "function_signature_item",
        "associated_type",
        "let_declaration",
        "expression_statement",
    },
    exclude_patterns=default_patterns('rust'),
    build_dirs=build_dirs('rust'),
    public_visibility=PUBLIC,
    visibility_detector=rust_visibility_detector,
    trait_name_extractor=rust_trait_name,
    field_collector=rust_field_collector,
    variant_collector=rust_variant_collector,
    macro_unwrapper=rust_macro_unwrapper,
)
