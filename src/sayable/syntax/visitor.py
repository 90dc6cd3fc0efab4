"""Visitor pattern for host AST traversal.

Enables tools to traverse and transform the host tree without modifying node
classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name
(snake_case), matching Python's AST visitor pattern.
See: https://docs.python.org/3/library/ast.html#ast.NodeVisitor

Type Parameters:
- ASTVisitor[T] is generic over return type T
- ASTVisitor (no type param) defaults to T=ASTNode
- ASTTransformer uses extended return type: ASTNode | None | list[ASTNode]

Python 3.13+.
"""

from collections.abc import Callable
from dataclasses import Field, fields, replace
from typing import ClassVar

from sayable.constants import MAX_DEPTH
from sayable.core.depth_guard import DepthGuard

from .ast import ASTNode, Span

__all__ = ["ASTTransformer", "ASTVisitor"]

type TransformerResult = ASTNode | None | list[ASTNode]


def _is_node(value: object) -> bool:
    """Child nodes are dataclass instances; spans are metadata, not children."""
    return hasattr(value, "__dataclass_fields__") and not isinstance(value, Span)


class ASTVisitor[T = ASTNode]:
    """Base visitor for traversing the host AST.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes. Override visit_NodeType methods to add custom
    behavior.

    Uses class-level dispatch table for performance:
    - Dispatch table built once per class definition via __init_subclass__
    - Falls back to instance-level cache for bound methods

    Example:
        >>> class CountCallsVisitor(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_CallExpression(self, node):
        ...         self.count += 1
        ...         return self.generic_visit(node)
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    # Class-level dispatch table (method names only, not bound methods)
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    # Class-level cache for dataclass fields per node type
    _fields_cache: ClassVar[dict[type, tuple[Field[object], ...]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit":
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum traversal depth (default: MAX_DEPTH from constants).
        """
        effective_max_depth = max_depth if max_depth is not None else MAX_DEPTH
        self._depth_guard = DepthGuard(max_depth=effective_max_depth)
        self._instance_dispatch_cache: dict[type, Callable[[ASTNode], T]] = {}

    def visit(self, node: ASTNode) -> T:
        """Visit a node (dispatcher with class-level + instance-level caching).

        Args:
            node: AST node to visit

        Returns:
            Result of visiting the node
        """
        node_type = type(node)

        if node_type in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[node_type](node)

        node_type_name = node_type.__name__
        if node_type_name in self._class_visit_methods:
            method = getattr(self, self._class_visit_methods[node_type_name])
        else:
            method = self.generic_visit

        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def _get_node_fields(self, node_type: type) -> tuple[Field[object], ...]:
        """Get cached dataclass fields for a node type."""
        if node_type not in ASTVisitor._fields_cache:
            ASTVisitor._fields_cache[node_type] = fields(node_type)
        return ASTVisitor._fields_cache[node_type]

    def generic_visit(self, node: ASTNode) -> T:
        """Default visitor (traverses children with depth protection).

        Args:
            node: AST node to visit

        Returns:
            The node itself (identity)

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        with self._depth_guard:
            for field in self._get_node_fields(type(node)):
                value = getattr(node, field.name)

                if value is None or isinstance(value, (str, int, float, bool)):
                    continue

                if isinstance(value, tuple):
                    for item in value:
                        if _is_node(item):
                            self.visit(item)
                elif _is_node(value):
                    self.visit(value)

        return node  # type: ignore[return-value]  # T defaults to ASTNode


class ASTTransformer(ASTVisitor[TransformerResult]):
    """AST transformer producing a new tree.

    Each visit method can return:
    - The modified node (replaces original)
    - None (removes node from a parent tuple; clears a single-node field)
    - A list of nodes (replaces a tuple item with multiple items)

    Nodes are frozen, so changed parents are rebuilt with dataclasses.replace();
    unchanged subtrees are shared with the input tree.

    Example - Rename identifiers:
        >>> class RenameTransformer(ASTTransformer):
        ...     def visit_Identifier(self, node):
        ...         return Identifier(name=node.name.upper(), span=node.span)
    """

    def transform(self, node: ASTNode) -> TransformerResult:
        """Transform an AST node or tree.

        This is the main entry point for transformations.
        """
        return self.visit(node)

    def generic_visit(self, node: ASTNode) -> TransformerResult:
        """Transform node children (default behavior with depth protection).

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        with self._depth_guard:
            changes: dict[str, object] = {}
            for field in self._get_node_fields(type(node)):
                if not field.init:
                    continue
                value = getattr(node, field.name)

                if isinstance(value, tuple):
                    transformed_items = self._transform_list(value)
                    if len(transformed_items) != len(value) or any(
                        a is not b for a, b in zip(transformed_items, value, strict=True)
                    ):
                        changes[field.name] = transformed_items
                elif _is_node(value):
                    transformed = self.visit(value)
                    if transformed is not value:
                        changes[field.name] = transformed

            if not changes:
                return node
            return replace(node, **changes)  # type: ignore[type-var]

    def _transform_list(self, nodes: tuple[object, ...]) -> tuple[object, ...]:
        """Transform a tuple of nodes.

        Handles node removal (None) and expansion (lists). Non-node items are
        kept as-is.
        """
        result: list[object] = []
        for node in nodes:
            if not _is_node(node):
                result.append(node)
                continue

            transformed = self.visit(node)  # type: ignore[arg-type]

            match transformed:
                case None:
                    continue
                case list():
                    result.extend(transformed)
                case _:
                    result.append(transformed)

        return tuple(result)
