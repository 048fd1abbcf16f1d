"""Resolve the style names an expression may reference.

Every rule here over-approximates: when an expression might reach a style we
count the style as referenced. A wrongly "used" style only hides a report,
while a wrongly "unused" one is a false alarm on code that works.
"""
from typing import FrozenSet, Mapping, Optional, Set

from .nodes import (
    ArrayLiteral,
    Binary,
    Conditional,
    Identifier,
    Logical,
    MemberAccess,
    ObjectLiteral,
    Property,
    Spread,
    Unary,
    Update,
)


def extract_style_names(node, containers: Mapping[str, FrozenSet[str]]) -> Set[str]:
    """Return the style names ``node`` could reference.

    Args:
        node: Lowered expression (see ``nodes.Expression``); None is allowed
        containers: Known style containers, binding name -> member names

    Returns:
        Set of referenced style names, empty for shapes without a rule
    """
    if node is None:
        return set()

    # styles.container / styles['container']
    if isinstance(node, MemberAccess):
        if isinstance(node.object, Identifier) and node.member:
            return {node.member}
        return set()

    if isinstance(node, ArrayLiteral):
        return _union(containers, *node.elements)

    if isinstance(node, Spread):
        return extract_style_names(node.argument, containers)

    # The test is included too: a style read only inside a condition still counts.
    if isinstance(node, Conditional):
        return _union(containers, node.consequent, node.alternate, node.test)

    # Whole container passed along: the receiver may pick any member.
    if isinstance(node, Identifier):
        members = containers.get(node.name)
        return set(members) if members else set()

    if isinstance(node, ObjectLiteral):
        names = set()
        for prop in node.properties:
            if isinstance(prop, Spread):
                names |= extract_style_names(prop.argument, containers)
            elif isinstance(prop, Property):
                names |= extract_style_names(prop.value, containers)
        return names

    if isinstance(node, Property):
        return extract_style_names(node.value, containers)

    if isinstance(node, Logical):
        return _union(containers, node.left, node.right)

    if isinstance(node, Binary):
        return _union(containers, node.left, node.right)

    if isinstance(node, (Unary, Update)):
        return extract_style_names(node.argument, containers)

    return set()


def _union(containers: Mapping[str, FrozenSet[str]], *nodes: Optional[object]) -> Set[str]:
    names = set()
    for child in nodes:
        names |= extract_style_names(child, containers)
    return names
