"""Typed AST variants consumed by the style analyzer.

The tree walker lowers tree-sitter nodes into this closed set of shapes.
Anything the analyzer has no rule for becomes ``Opaque``, so every consumer
can treat an unknown shape as "nothing to see here".
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Location:
    """1-based source position of a node."""
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Opaque:
    """Any expression shape without an extraction rule (calls, JSX, literals...)."""
    kind: str = ""
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Identifier:
    name: str
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class MemberAccess:
    """``object.member`` or ``object['member']``.

    ``member`` is None when the property cannot be read statically.
    """
    object: 'Expression'
    member: Optional[str]
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Spread:
    argument: 'Expression'
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class ArrayLiteral:
    elements: List['Expression'] = field(default_factory=list)
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Property:
    """Object literal entry. ``key`` is None for computed or numeric keys."""
    key: Optional[str]
    value: 'Expression'
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class ObjectLiteral:
    properties: List[Union[Property, Spread]] = field(default_factory=list)
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Conditional:
    test: 'Expression'
    consequent: 'Expression'
    alternate: 'Expression'
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Logical:
    operator: str
    left: 'Expression'
    right: 'Expression'
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Binary:
    operator: str
    left: 'Expression'
    right: 'Expression'
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Unary:
    operator: str
    argument: 'Expression'
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Update:
    operator: str
    argument: 'Expression'
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Call:
    callee: 'Expression'
    arguments: List['Expression'] = field(default_factory=list)
    location: Location = field(default_factory=Location)


Expression = Union[
    Opaque, Identifier, MemberAccess, Spread, ArrayLiteral, Property,
    ObjectLiteral, Conditional, Logical, Binary, Unary, Update, Call,
]


# Visit sites


@dataclass(frozen=True)
class ObjectPattern:
    """Object destructuring target. ``keys`` holds the static keys only."""
    keys: List[str] = field(default_factory=list)
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class VariableBinding:
    """``const target = init``. ``init`` is None when there is no initializer."""
    target: Union[Identifier, ObjectPattern, Opaque]
    init: Optional[Expression]
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Attribute:
    """JSX attribute.

    ``value`` is only set when the attribute carries an embedded expression
    (``name={...}``); string values and bare attributes leave it None.
    """
    name: Optional[str]
    value: Optional[Expression]
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Return:
    argument: Optional[Expression]
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class Assignment:
    operator: str
    target: Expression
    value: Optional[Expression]
    location: Location = field(default_factory=Location)


Site = Union[VariableBinding, Attribute, Return, Assignment]
