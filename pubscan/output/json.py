"""
JsonRenderer — Render an inventory as JSON for piping

Shape:
    {"files": {path: {kind: [{"name", "line", "fields"?}]}}, "diagnostics": [...]}
"""

import json
from typing import TYPE_CHECKING, Any, Dict

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import InventoryView


class JsonRenderer(BaseRenderer):
    """
    Render an inventory as JSON.

    Never truncates: names and type text are emitted as extracted.
    """

    def render(self, view: "InventoryView") -> str:
        files: Dict[str, Dict[str, Any]] = {}
        for path, groups in view.files:
            files[path] = {
                kind.value: [self._record_data(record) for record in records]
                for kind, records in groups
            }

        output: Dict[str, Any] = {"files": files}
        if view.summary is not None:
            output["summary"] = {
                k: v for k, v in view.summary.items() if k != "diagnostics"
            }
            output["diagnostics"] = view.summary.get("diagnostics", [])

        return json.dumps(output, indent=2, ensure_ascii=False)

    @staticmethod
    def _record_data(record) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": record.name, "line": record.line}
        if record.fields is not None:
            data["fields"] = dict(record.fields)
        return data
