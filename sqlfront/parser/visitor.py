"""
Generic AST traversal.

AstVisitor dispatches each node to ``visit_<node_type>`` (snake case of the
class name, e.g. ``visit_comparison_expression``). AstVisitor declares one
such method for every node class in ``ast``; by default each one hands the
node to the method of the parent class (``visit_literal``,
``visit_expression``, ..., ``visit_node``). The default ``visit_node`` visits
the children, so subclasses only override the node types they care about.
"""

from typing import Any, Iterator

from . import ast


class AstVisitor:
    """Base visitor with a default visit-children behaviour."""

    _dispatch_cache: dict = {}

    def process(self, node: ast.Node, context: Any = None) -> Any:
        """
        Visit a node with the most specific method this visitor defines.

        Args:
            node: AST node to visit
            context: Arbitrary value handed to the visit method

        Returns:
            Whatever the visit method returns
        """
        key = (type(self), type(node))
        method = self._dispatch_cache.get(key)
        if method is None:
            method = self._resolve(type(node))
            self._dispatch_cache[key] = method
        return method(self, node, context)

    def _resolve(self, node_type: type):
        for cls in node_type.__mro__:
            name = cls.__dict__.get('visit_name')
            if name is None:
                continue
            method = getattr(type(self), name, None)
            if method is not None:
                return method
        return type(self).visit_node

    def visit_node(self, node: ast.Node, context: Any) -> Any:
        """Default: visit every child, return None."""
        for child in node.children():
            self.process(child, context)
        return None


def _delegate_to(parent_method: str):
    def visit(self, node, context):
        return getattr(self, parent_method)(node, context)
    return visit


def _declare_visit_methods(node_type: type):
    for subclass in node_type.__subclasses__():
        parent_method = node_type.__dict__.get('visit_name', 'visit_node')
        if subclass.visit_name not in AstVisitor.__dict__:
            method = _delegate_to(parent_method)
            method.__name__ = subclass.visit_name
            method.__qualname__ = f"AstVisitor.{subclass.visit_name}"
            method.__doc__ = f"Visit a {subclass.__name__}; defaults to {parent_method}."
            setattr(AstVisitor, subclass.visit_name, method)
        _declare_visit_methods(subclass)


_declare_visit_methods(ast.Node)


def walk(node: ast.Node) -> Iterator[ast.Node]:
    """Yield ``node`` and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(current.children())))
