"""
TextRenderer — Human-readable inventory listing

Layout:
    src/lib.rs
      Struct:
        Point                          (line: 3)
          Fields:
            ├─ x                    : i32
            └─ y                    : i32

Names are padded to a fixed column so line numbers align and are never
shortened. Type text is truncated to the terminal width unless full mode
is on.
"""

from typing import TYPE_CHECKING, List, Optional

from .base import BaseRenderer
from ..core.inventory import DeclarationRecord

if TYPE_CHECKING:
    from . import InventoryView


NAME_COLUMN = 30
FIELD_COLUMN = 20


class TextRenderer(BaseRenderer):
    """Render an inventory as an indented listing."""

    def render(self, view: "InventoryView") -> str:
        if not view.files:
            return view.empty_message

        lines: List[str] = []
        for path, groups in view.files:
            lines.append(path)
            for kind, records in groups:
                lines.append(f"  {kind.value}:")
                for record in records:
                    lines.extend(self._render_record(record))
            lines.append("")

        if view.summary:
            lines.append(self._render_summary(view.summary))

        return "\n".join(lines).rstrip("\n")

    def _render_record(self, record: DeclarationRecord) -> List[str]:
        line = str(record.line) if record.line is not None else "N/A"
        lines = [f"    {record.name:<{NAME_COLUMN}} (line: {line})"]

        if record.fields:
            lines.append("      Fields:")
            items = list(record.fields.items())
            for index, (field_name, type_text) in enumerate(items):
                marker = self.symbols.tree_end if index == len(items) - 1 else self.symbols.tree_branch
                lines.append(self._render_field(marker, field_name, type_text))
        return lines

    def _render_field(self, marker: str, field_name: str, type_text: str) -> str:
        prefix = f"        {marker} {field_name:<{FIELD_COLUMN}} :"
        if not type_text:
            return prefix
        room = max(20, self.width - len(prefix) - 1)
        return f"{prefix} {self.truncate(type_text, room)}"

    def _render_summary(self, summary: dict) -> str:
        text = (
            f"{self.plural(summary.get('files_scanned', 0), 'file')} scanned, "
            f"{self.plural(summary.get('declarations', 0), 'public declaration')}"
        )
        skipped: Optional[int] = summary.get("files_skipped")
        if skipped:
            text += f", {skipped} skipped"
        return text
