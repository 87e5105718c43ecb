"""IR (Intermediate Representation) package for loop-analyzer.

Provides:
    parse_source(source, dialect) -> Node
    walk(node) -> Iterator[Node]
"""

from __future__ import annotations

from loop_analyzer.ir.js_frontend import ParseError, dialect_for, parse_source
from loop_analyzer.ir.nodes import Node
from loop_analyzer.ir.traverse import iter_calls, walk

__all__ = ["Node", "ParseError", "dialect_for", "iter_calls", "parse_source", "walk"]
