"""Pre-order tree-sitter walker that feeds typed visit sites to callbacks.

The walker lowers the tree-sitter nodes that introduce style definitions or
usages (variable declarators, JSX attributes, return statements and
assignments) into the variants of ``nodes`` and hands them to whichever
callbacks registered for that shape. Analyzers never touch tree-sitter
directly.
"""
import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

from tree_sitter import Node, Tree

from .nodes import (
    ArrayLiteral,
    Assignment,
    Attribute,
    Binary,
    Call,
    Conditional,
    Identifier,
    Location,
    Logical,
    MemberAccess,
    ObjectLiteral,
    ObjectPattern,
    Opaque,
    Property,
    Return,
    Spread,
    Unary,
    Update,
    VariableBinding,
)

logger = logging.getLogger(__name__)

Callback = Callable[[object], None]
Predicate = Callable[[object], bool]

# Deeper expressions lower to Opaque, which keeps extraction recursion bounded.
MAX_LOWERING_DEPTH = 100

LOGICAL_OPERATORS = {'&&', '||', '??'}

SITE_NODE_TYPES = {
    'variable_declarator',
    'jsx_attribute',
    'return_statement',
    'assignment_expression',
    'augmented_assignment_expression',
}

# Wrappers that do not change which value flows through them
TRANSPARENT_WRAPPERS = {
    'parenthesized_expression',
    'as_expression',
    'satisfies_expression',
    'non_null_expression',
}


def node_text(node: Node) -> str:
    return node.text.decode('utf-8', errors='replace') if node.text is not None else ''


def node_location(node: Node) -> Location:
    row, column = node.start_point
    return Location(line=row + 1, column=column + 1)


def static_key(node: Optional[Node]) -> Optional[str]:
    """Return the statically known name of a property key node.

    Identifiers and non-empty string literals are static; computed keys,
    numbers and empty strings are not.
    """
    if node is None:
        return None
    if node.type in ('property_identifier', 'identifier',
                     'shorthand_property_identifier', 'shorthand_property_identifier_pattern'):
        return node_text(node) or None
    if node.type == 'string':
        text = node_text(node)
        if len(text) >= 2 and text[0] == text[-1] and text[0] in '"\'':
            return text[1:-1] or None
    return None


def _first_named_child(node: Node) -> Optional[Node]:
    for child in node.named_children:
        if child.type != 'comment':
            return child
    return None


def lower_expression(node: Optional[Node], depth: int = 0):
    """Lower a tree-sitter expression node into an ``nodes.Expression``.

    Unknown, missing or malformed shapes become ``Opaque``; this never raises
    for well-formed tree-sitter input, including trees with ERROR nodes.
    """
    if node is None:
        return None
    location = node_location(node)
    if depth > MAX_LOWERING_DEPTH or node.is_missing:
        return Opaque(kind=node.type, location=location)

    kind = node.type

    def lower(child):
        return lower_expression(child, depth + 1)

    if kind in TRANSPARENT_WRAPPERS:
        inner = _first_named_child(node)
        return lower(inner) if inner is not None else Opaque(kind=kind, location=location)

    if kind in ('identifier', 'shorthand_property_identifier'):
        return Identifier(name=node_text(node), location=location)

    if kind == 'member_expression':
        obj = node.child_by_field_name('object')
        prop = node.child_by_field_name('property')
        if obj is None:
            return Opaque(kind=kind, location=location)
        member = node_text(prop) if prop is not None and prop.type == 'property_identifier' else None
        return MemberAccess(object=lower(obj), member=member or None, location=location)

    if kind == 'subscript_expression':
        obj = node.child_by_field_name('object')
        index = node.child_by_field_name('index')
        if obj is None:
            return Opaque(kind=kind, location=location)
        member = static_key(index) if index is not None and index.type == 'string' else None
        return MemberAccess(object=lower(obj), member=member, location=location)

    if kind == 'array':
        elements = [lower(child) for child in node.named_children if child.type != 'comment']
        return ArrayLiteral(elements=elements, location=location)

    if kind == 'spread_element':
        return Spread(argument=lower(_first_named_child(node)), location=location)

    if kind == 'object':
        return ObjectLiteral(properties=_lower_object_entries(node, depth), location=location)

    if kind == 'ternary_expression':
        return Conditional(
            test=lower(node.child_by_field_name('condition')),
            consequent=lower(node.child_by_field_name('consequence')),
            alternate=lower(node.child_by_field_name('alternative')),
            location=location,
        )

    if kind == 'binary_expression':
        operator_node = node.child_by_field_name('operator')
        operator = node_text(operator_node) if operator_node is not None else ''
        left = lower(node.child_by_field_name('left'))
        right = lower(node.child_by_field_name('right'))
        if operator in LOGICAL_OPERATORS:
            return Logical(operator=operator, left=left, right=right, location=location)
        return Binary(operator=operator, left=left, right=right, location=location)

    if kind == 'unary_expression':
        operator_node = node.child_by_field_name('operator')
        return Unary(
            operator=node_text(operator_node) if operator_node is not None else '',
            argument=lower(node.child_by_field_name('argument')),
            location=location,
        )

    if kind == 'update_expression':
        operator_node = node.child_by_field_name('operator')
        return Update(
            operator=node_text(operator_node) if operator_node is not None else '',
            argument=lower(node.child_by_field_name('argument')),
            location=location,
        )

    if kind == 'call_expression':
        args_node = node.child_by_field_name('arguments')
        arguments = []
        if args_node is not None and args_node.type == 'arguments':
            arguments = [lower(child) for child in args_node.named_children if child.type != 'comment']
        return Call(callee=lower(node.child_by_field_name('function')), arguments=arguments,
                    location=location)

    return Opaque(kind=kind, location=location)


def _lower_object_entries(node: Node, depth: int) -> List:
    entries = []
    for child in node.named_children:
        location = node_location(child)
        if child.type == 'pair':
            key_node = child.child_by_field_name('key')
            value = lower_expression(child.child_by_field_name('value'), depth + 1)
            entries.append(Property(key=static_key(key_node), value=value, location=location))
        elif child.type == 'shorthand_property_identifier':
            # { styles } is { styles: styles }
            entries.append(Property(key=static_key(child), value=lower_expression(child, depth + 1),
                                    location=location))
        elif child.type == 'method_definition':
            entries.append(Property(key=static_key(child.child_by_field_name('name')),
                                    value=Opaque(kind=child.type, location=location),
                                    location=location))
        elif child.type == 'spread_element':
            entries.append(lower_expression(child, depth + 1))
    return entries


def lower_pattern(node: Optional[Node]):
    """Lower a binding target (identifier or object destructuring pattern)."""
    if node is None:
        return Opaque(kind='missing')
    location = node_location(node)

    if node.type == 'identifier':
        return Identifier(name=node_text(node), location=location)

    if node.type == 'object_pattern':
        keys = []
        for child in node.named_children:
            key_node = None
            if child.type == 'shorthand_property_identifier_pattern':
                key_node = child
            elif child.type == 'pair_pattern':
                key_node = child.child_by_field_name('key')
            elif child.type == 'object_assignment_pattern':
                # { container = fallback }
                key_node = child.child_by_field_name('left')
            key = static_key(key_node)
            if key:
                keys.append(key)
        return ObjectPattern(keys=keys, location=location)

    return Opaque(kind=node.type, location=location)


def lower_site(node: Node):
    """Lower a tree-sitter node into a visit site, or None if it is not one."""
    kind = node.type
    location = node_location(node)

    if kind == 'variable_declarator':
        return VariableBinding(
            target=lower_pattern(node.child_by_field_name('name')),
            init=lower_expression(node.child_by_field_name('value')),
            location=location,
        )

    if kind == 'jsx_attribute':
        name = None
        value = None
        children = [child for child in node.named_children if child.type != 'comment']
        if children and children[0].type == 'property_identifier':
            name = node_text(children[0])
        if len(children) > 1 and children[-1].type == 'jsx_expression':
            value = lower_expression(_first_named_child(children[-1]))
        return Attribute(name=name, value=value, location=location)

    if kind == 'return_statement':
        return Return(argument=lower_expression(_first_named_child(node)), location=location)

    if kind in ('assignment_expression', 'augmented_assignment_expression'):
        operator_node = node.child_by_field_name('operator')
        operator = node_text(operator_node) if operator_node is not None else '='
        return Assignment(
            operator=operator,
            target=lower_expression(node.child_by_field_name('left')),
            value=lower_expression(node.child_by_field_name('right')),
            location=location,
        )

    return None


class TreeWalker:
    """Walks a tree-sitter tree in document order and dispatches visit sites.

    Callbacks register per site type (``VariableBinding``, ``Attribute``,
    ``Return``, ``Assignment``) with an optional predicate, and exit callbacks
    run once after the walk completes.
    """

    def __init__(self):
        self._callbacks: Dict[type, List[Tuple[Optional[Predicate], Callback]]] = defaultdict(list)
        self._exit_callbacks: List[Callable[[], None]] = []

    def on(self, shape: type, callback: Callback, when: Optional[Predicate] = None):
        """Invoke ``callback(site)`` for every site of type ``shape`` matching ``when``."""
        self._callbacks[shape].append((when, callback))

    def on_exit(self, callback: Callable[[], None]):
        self._exit_callbacks.append(callback)

    def walk(self, tree: Tree):
        """Visit every node of ``tree`` in pre-order, then notify exit callbacks."""
        self.walk_node(tree.root_node)

    def walk_node(self, root: Node):
        visited = 0
        stack = [root]
        while stack:
            node = stack.pop()
            visited += 1
            self._dispatch(node)
            stack.extend(reversed(node.named_children))

        logger.debug("Walked %d nodes", visited)
        for callback in self._exit_callbacks:
            callback()

    def _dispatch(self, node: Node):
        if node.type not in SITE_NODE_TYPES or not self._callbacks:
            return
        site = lower_site(node)
        for when, callback in self._callbacks.get(type(site), ()):
            if when is None or when(site):
                callback(site)
