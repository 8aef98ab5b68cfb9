"""
Language configurations for declaration extraction.

Each language has its own module defining:
- Declaration queries (what AST nodes to record)
- Exclude patterns (what paths to skip)
- Custom hooks (visibility, names, field maps)

Supported languages:
- rust.py: Rust (.rs)
"""

from .rust import RUST_CONFIG

__all__ = [
    'RUST_CONFIG',
]
