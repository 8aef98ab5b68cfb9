"""
DeclarationExtractor — Public surface of one syntax tree.

Walks a parsed tree and records every public declaration into a single
FileInventory. Nested scopes are flattened as they are visited:
- module bodies contribute records to the same inventory
- struct/union field lists become the record's field map
- enum variant lists become the enum record's variant map
- trait and impl members become (qualified) function records

Design principle: Language-agnostic walk driven by LanguageConfig.
Unrecognized node types are skipped silently.

Usage:
    from pubscan.core.parsing import DeclarationExtractor, TreeParser
    from pubscan.core.parsing.languages import RUST_CONFIG

    tree = TreeParser(RUST_CONFIG).parse(source)
    extractor = DeclarationExtractor(RUST_CONFIG)
    file_inventory = extractor.extract(tree, source, "src/lib.rs")
"""

from typing import Dict, Optional, TYPE_CHECKING

from ..inventory import DeclarationKind, DeclarationRecord, FileInventory, OPAQUE_NAME
from .config import (
    LanguageConfig,
    DeclarationQuery,
    SCOPE_FIELDS,
    SCOPE_VARIANTS,
    SCOPE_DECLARATIONS,
    SCOPE_TRAIT,
    SCOPE_IMPL,
    SCOPE_FOREIGN,
)
from .nodes import node_text, line_of

if TYPE_CHECKING:
    from tree_sitter import Node, Tree


class DeclarationExtractor:
    """
    Extracts public declarations from a tree-sitter syntax tree.

    Uses LanguageConfig to decide which nodes become records, whether
    they are public, and how nested content is flattened. Holds no
    per-file state, so one instance can serve any number of files.
    """

    def __init__(self, config: LanguageConfig):
        """
        Initialize extractor with a language configuration.

        Args:
            config: LanguageConfig providing queries and hooks
        """
        self.config = config
        self._queries: Dict[str, DeclarationQuery] = config.query_map()
        self._foreign_queries: Dict[str, DeclarationQuery] = config.foreign_query_map()

    def extract(self, tree: 'Tree', source: bytes, file_path: str) -> FileInventory:
        """
        Extract the public declarations of one file.

        Args:
            tree: Parsed syntax tree (no error nodes)
            source: Bytes the tree was parsed from
            file_path: Declaring file, stamped on every record

        Returns:
            FileInventory with records in visit order
        """
        inventory = FileInventory(file_path)
        self._walk_declarations(tree.root_node, source, inventory)
        return inventory

    # =========================================================================
    # Walk
    # =========================================================================

    def _walk_declarations(self, container: 'Node', source: bytes, inventory: FileInventory) -> None:
        """Visit each item of a source file or inline module body, in order."""
        for node in container.named_children:
            self._visit(node, source, inventory)

    def _visit(self, node: 'Node', source: bytes, inventory: FileInventory) -> None:
        """
        Record one item-level node and flatten its nested content.

        Args:
            node: Item-level AST node
            source: File content
            inventory: Accumulator for the current file
        """
        if self.config.macro_unwrapper:
            wrapped = self.config.macro_unwrapper(node)
            if wrapped is not None:
                node = wrapped

        query = self._queries.get(node.type)
        if query is None:
            if node.type in self.config.opaque_types:
                self._add(inventory, DeclarationKind.OPAQUE, OPAQUE_NAME, line_of(node))
            return

        if query.requires_public and not self._is_public(node, source):
            return

        record = None
        if query.kind is not None:
            record = self._build_record(node, query, source, inventory.file_path)
            if record is None:
                return
            if query.scope == SCOPE_FIELDS and self.config.field_collector:
                record.fields = self.config.field_collector(node, source)
            elif query.scope == SCOPE_VARIANTS and self.config.variant_collector:
                record.fields = self.config.variant_collector(node, source)
            inventory.add(record)

        if query.scope == SCOPE_DECLARATIONS:
            body = node.child_by_field_name("body")
            if body is not None:
                self._walk_declarations(body, source, inventory)
        elif query.scope == SCOPE_TRAIT and record is not None:
            self._walk_trait(node, record.name, source, inventory)
        elif query.scope == SCOPE_IMPL:
            self._walk_impl(node, source, inventory)
        elif query.scope == SCOPE_FOREIGN:
            self._walk_foreign(node, source, inventory)

    def _walk_trait(self, node: 'Node', trait_name: str, source: bytes, inventory: FileInventory) -> None:
        """Trait members are recorded whatever their own modifier says."""
        for member in self._members(node, self.config.trait_member_types):
            name, line = self._name_and_line(member, "name", source)
            if name:
                self._add(inventory, DeclarationKind.TRAIT_FUNCTION, f"{trait_name}::{name}", line)

    def _walk_impl(self, node: 'Node', source: bytes, inventory: FileInventory) -> None:
        """
        Record impl block members.

        Trait impls: every member as TraitFn "Trait::member".
        Inherent impls: public members only, as Fn "member".
        """
        trait_name = None
        if self.config.trait_name_extractor:
            trait_name = self.config.trait_name_extractor(node, source)

        for member in self._members(node, self.config.impl_member_types):
            name, line = self._name_and_line(member, "name", source)
            if not name:
                continue
            if trait_name:
                self._add(inventory, DeclarationKind.TRAIT_FUNCTION, f"{trait_name}::{name}", line)
            elif self._is_public(member, source):
                self._add(inventory, DeclarationKind.FUNCTION, name, line)

    def _walk_foreign(self, node: 'Node', source: bytes, inventory: FileInventory) -> None:
        """Public items of an extern block, per foreign_queries."""
        body = node.child_by_field_name("body")
        if body is None:
            return
        for item in body.named_children:
            query = self._foreign_queries.get(item.type)
            if query is None or query.kind is None:
                continue
            if query.requires_public and not self._is_public(item, source):
                continue
            record = self._build_record(item, query, source, inventory.file_path)
            if record is not None:
                inventory.add(record)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _members(self, node: 'Node', member_types):
        body = node.child_by_field_name("body")
        if body is None:
            return []
        return [child for child in body.named_children if child.type in member_types]

    def _is_public(self, node: 'Node', source: bytes) -> bool:
        if self.config.visibility_detector is None:
            return False
        visibility = self.config.visibility_detector(node, source)
        return visibility == self.config.public_visibility

    def _name_and_line(self, node: 'Node', name_field: Optional[str], source: bytes):
        """Name text and 1-indexed line of the name token (or the node)."""
        if name_field:
            name_node = node.child_by_field_name(name_field)
            if name_node is not None:
                return node_text(name_node, source), line_of(name_node)
        return None, line_of(node)

    def _build_record(
        self,
        node: 'Node',
        query: DeclarationQuery,
        source: bytes,
        file_path: str,
    ) -> Optional[DeclarationRecord]:
        """
        Build a record for a matched node.

        Returns:
            DeclarationRecord, or None if no name can be determined
        """
        name, line = self._name_and_line(node, query.name_field, source)
        if query.name_builder:
            name = query.name_builder(node, source)
        if not name:
            return None
        return DeclarationRecord(kind=query.kind, name=name, file_path=file_path, line=line)

    def _add(self, inventory: FileInventory, kind: DeclarationKind, name: str, line: int) -> None:
        inventory.add(DeclarationRecord(kind=kind, name=name, file_path=inventory.file_path, line=line))
