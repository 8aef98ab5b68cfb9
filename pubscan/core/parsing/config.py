"""
Parsing configuration data structures.

Defines LanguageConfig and DeclarationQuery — the foundation for
language-agnostic declaration extraction via tree-sitter.

Design principle: New languages are added via config, not code changes.
"""

from dataclasses import dataclass, field
from typing import Set, List, Callable, Optional, Dict

from ..inventory import DeclarationKind


# How a matched declaration's nested content is flattened
SCOPE_FIELDS = "fields"              # field list -> record.fields
SCOPE_VARIANTS = "variants"          # variant list -> record.fields
SCOPE_DECLARATIONS = "declarations"  # inline body -> same FileInventory
SCOPE_TRAIT = "trait"                # members -> TraitFn records
SCOPE_IMPL = "impl"                  # members -> Fn / TraitFn records
SCOPE_FOREIGN = "foreign"            # foreign items -> foreign_queries

SCOPES = {
    SCOPE_FIELDS, SCOPE_VARIANTS, SCOPE_DECLARATIONS,
    SCOPE_TRAIT, SCOPE_IMPL, SCOPE_FOREIGN,
}


@dataclass
class DeclarationQuery:
    """
    Defines which AST nodes become declaration records.

    Maps a tree-sitter node type to a DeclarationKind.

    Attributes:
        node_type: Tree-sitter AST node type (e.g., "function_item")
        kind: Kind of record produced, None for containers that only
            contribute their nested content (impl blocks, extern blocks)
        name_field: AST field containing the declaration name
        requires_public: Whether the node needs a public visibility modifier
        scope: How nested content is flattened (one of SCOPES), or None
        name_builder: Custom name extraction (node, source) -> name
    """
    node_type: str
    kind: Optional[DeclarationKind]
    name_field: Optional[str] = "name"
    requires_public: bool = True
    scope: Optional[str] = None
    name_builder: Optional[Callable[..., Optional[str]]] = None

    def __post_init__(self):
        if self.scope is not None and self.scope not in SCOPES:
            raise ValueError(f"Unknown scope '{self.scope}' for {self.node_type}")


@dataclass
class LanguageConfig:
    """
    Configuration for parsing a specific programming language.

    Encapsulates all language-specific rules:
    - File extensions to match
    - Tree-sitter grammar name
    - Declaration queries at item level and inside foreign blocks
    - Member node types for traits and impl blocks
    - Custom hooks for visibility, trait names, type text

    Attributes:
        name: Human-readable name (e.g., "Rust")
        tree_sitter_name: Grammar name for tree-sitter (e.g., "rust")
        extensions: File extensions this config handles (e.g., {'.rs'})
        declaration_queries: Item-level queries
        foreign_queries: Queries applied inside foreign (extern) blocks
        trait_member_types: Node types recorded as trait functions
        impl_member_types: Node types considered inside impl blocks
        opaque_types: Item-level node types recorded as opaque fragments
        exclude_patterns: Glob patterns to exclude (e.g., ['**/.git/*'])
        build_dirs: Build output dir name -> manifest in its parent (e.g., {'target': 'Cargo.toml'})
        public_visibility: Visibility label that counts as public
        visibility_detector: (node, source) -> visibility label
        trait_name_extractor: (impl node, source) -> trait name or None
        field_collector: (struct/union node, source) -> {field: type text}
        variant_collector: (enum node, source) -> {variant: payload text}
        macro_unwrapper: (node) -> macro node wrapped in a statement, or None
    """
    # Identity
    name: str
    tree_sitter_name: str
    extensions: Set[str]

    # Extraction rules
    declaration_queries: List[DeclarationQuery] = field(default_factory=list)
    foreign_queries: List[DeclarationQuery] = field(default_factory=list)
    trait_member_types: Set[str] = field(default_factory=set)
    impl_member_types: Set[str] = field(default_factory=set)
    opaque_types: Set[str] = field(default_factory=set)

    # Exclusions
    exclude_patterns: List[str] = field(default_factory=list)
    build_dirs: Dict[str, str] = field(default_factory=dict)

    # Visibility
    public_visibility: str = "public"

    # Customization hooks (optional)
    visibility_detector: Optional[Callable[..., str]] = None
    trait_name_extractor: Optional[Callable[..., Optional[str]]] = None
    field_collector: Optional[Callable[..., Dict[str, str]]] = None
    variant_collector: Optional[Callable[..., Dict[str, str]]] = None
    macro_unwrapper: Optional[Callable[..., object]] = None

    def query_map(self) -> Dict[str, DeclarationQuery]:
        """Item-level queries keyed by node type."""
        return {query.node_type: query for query in self.declaration_queries}

    def foreign_query_map(self) -> Dict[str, DeclarationQuery]:
        """Foreign-block queries keyed by node type."""
        return {query.node_type: query for query in self.foreign_queries}
