"""no-unused-styles: report StyleSheet.create members that are never referenced.

Two-pass definition/usage analysis driven by a ``TreeWalker``:

1. While the walker streams visit sites, container definitions populate the
   symbol table and usage sites (style attributes, destructuring, returns,
   assignments) mark names as used.
2. When the walk ends, every defined style without a usage becomes a
   ``Finding``. This happens once, after the whole file has been seen, since
   a style may be used above the ``StyleSheet.create`` call that defines it.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from tree_sitter import Tree

from .nodes import (
    Assignment,
    Attribute,
    Call,
    Identifier,
    MemberAccess,
    ObjectLiteral,
    ObjectPattern,
    Property,
    Return,
    VariableBinding,
)
from .parser import LanguageParser
from .rule_meta import DEFAULT_LOCALE, RULE_ID, format_message
from .style_extractor import extract_style_names
from .symbol_table import StyleSymbolTable
from .tree_walker import TreeWalker

logger = logging.getLogger(__name__)

# StyleSheet.create(...)
STYLE_FACTORY_OBJECT = 'StyleSheet'
STYLE_FACTORY_METHOD = 'create'

# Attribute names that carry styles: style, contentContainerStyle, ...
# Deliberately narrow; "STYLE" or "styles" do not match.
STYLE_ATTRIBUTE_PATTERN = re.compile(r'[sS]tyle$')


@dataclass
class Finding:
    """A style that is defined but never used."""
    name: str
    node: Property
    rule_id: str = RULE_ID

    @property
    def line(self) -> int:
        return self.node.location.line

    @property
    def column(self) -> int:
        return self.node.location.column

    def message(self, locale: str = DEFAULT_LOCALE) -> str:
        return format_message(self.name, locale)


def is_style_factory_call(expression) -> bool:
    """True for ``StyleSheet.create(...)``."""
    if not isinstance(expression, Call):
        return False
    callee = expression.callee
    return (
        isinstance(callee, MemberAccess)
        and isinstance(callee.object, Identifier)
        and callee.object.name == STYLE_FACTORY_OBJECT
        and callee.member == STYLE_FACTORY_METHOD
    )


def is_container_definition(site: VariableBinding) -> bool:
    return isinstance(site.target, Identifier) and is_style_factory_call(site.init)


def is_container_destructuring(site: VariableBinding) -> bool:
    return isinstance(site.target, ObjectPattern) and isinstance(site.init, Identifier)


def is_style_attribute(site: Attribute) -> bool:
    return bool(site.name) and site.value is not None and bool(STYLE_ATTRIBUTE_PATTERN.search(site.name))


class UnusedStylesAnalyzer:
    """Per-file analyzer. States: traversing, then finalized.

    Create one instance per file; ``register`` it on a walker, walk, and
    read ``findings``. The symbol table is never shared between files.
    """

    def __init__(self):
        self.symbols = StyleSymbolTable()
        self._findings: Optional[List[Finding]] = None

    @property
    def finalized(self) -> bool:
        return self._findings is not None

    @property
    def findings(self) -> List[Finding]:
        """Findings in definition order.

        Raises:
            RuntimeError: If the traversal has not finished yet
        """
        if self._findings is None:
            raise RuntimeError("Findings are only available after the traversal has finished")
        return list(self._findings)

    def register(self, walker: TreeWalker):
        """Subscribe this analyzer's visit callbacks on ``walker``."""
        walker.on(VariableBinding, self.visit_container_definition, when=is_container_definition)
        walker.on(VariableBinding, self.visit_destructuring, when=is_container_destructuring)
        walker.on(Attribute, self.visit_style_attribute, when=is_style_attribute)
        walker.on(Return, self.visit_return)
        walker.on(Assignment, self.visit_assignment)
        walker.on_exit(self.finalize)

    def _ensure_traversing(self):
        if self.finalized:
            raise RuntimeError("Analyzer already finalized; create a new one per file")

    def visit_container_definition(self, site: VariableBinding):
        """``const styles = StyleSheet.create({...})``"""
        self._ensure_traversing()
        if not site.init.arguments:
            return

        container_name = site.target.name
        members = []
        first_argument = site.init.arguments[0]
        if isinstance(first_argument, ObjectLiteral):
            for prop in first_argument.properties:
                if not isinstance(prop, Property):
                    continue
                if prop.key is None:
                    logger.debug("Skipping non-static style key at line %d", prop.location.line)
                    continue
                members.append((prop.key, prop))

        self.symbols.define_container(container_name, members)
        logger.debug("Style container '%s' defines %d styles", container_name, len(members))

    def visit_destructuring(self, site: VariableBinding):
        """``const { container, text } = styles``"""
        self._ensure_traversing()
        if self.symbols.lookup_container(site.init.name) is None:
            return
        self.symbols.record_usages(site.target.keys)

    def visit_style_attribute(self, site: Attribute):
        """``<View style={...} />``"""
        self._record(site.value)

    def visit_return(self, site: Return):
        self._record(site.argument)

    def visit_assignment(self, site: Assignment):
        self._record(site.value)

    def _record(self, expression):
        self._ensure_traversing()
        if expression is None:
            return
        self.symbols.record_usages(extract_style_names(expression, self.symbols.containers))

    def finalize(self) -> List[Finding]:
        """Compute findings. Runs once; later calls return the same result."""
        if self._findings is None:
            self._findings = [Finding(name=name, node=node) for name, node in self.symbols.unused_definitions()]
            logger.debug("%d of %d styles unused", len(self._findings), len(self.symbols.definitions))
        return list(self._findings)


def analyze_tree(tree: Tree) -> List[Finding]:
    """Run a fresh analyzer over a parsed tree and return its findings."""
    analyzer = UnusedStylesAnalyzer()
    walker = TreeWalker()
    analyzer.register(walker)
    walker.walk(tree)
    return analyzer.findings


def analyze_source(source_code: bytes | str, language: str = 'tsx') -> List[Finding]:
    """Parse ``source_code`` as ``language`` and return its findings.

    Raises:
        ValueError: If language is not supported
    """
    tree = LanguageParser(language).parse_source(source_code)
    return analyze_tree(tree)
