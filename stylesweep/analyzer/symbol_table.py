"""Per-file bookkeeping of style definitions and usages."""
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from .nodes import Property


class StyleSymbolTable:
    """Defined styles, used style names and container membership for one file.

    A table lives for exactly one traversal. Build a new one per file so
    definitions and usages never leak between unrelated files.
    """

    def __init__(self):
        """Initialize empty definition, usage and membership maps."""
        self.definitions: Dict[str, Property] = {}  # style name -> defining property
        self.used: Set[str] = set()
        self.containers: Dict[str, FrozenSet[str]] = {}  # binding name -> member names

    def define_container(self, container_name: str, members: Iterable[Tuple[str, Property]]):
        """Register (or replace) a style container and define its members.

        Member definitions are global to the file: a name defined by two
        containers keeps only the most recent defining node, while its
        position in the report order is that of the first definition.

        Args:
            container_name: Binding the ``StyleSheet.create`` result is assigned to
            members: ``(style name, defining property)`` pairs in source order
        """
        member_names = set()
        for name, node in members:
            self.definitions[name] = node
            member_names.add(name)
        self.containers[container_name] = frozenset(member_names)

    def record_usage(self, name: str):
        self.used.add(name)

    def record_usages(self, names: Iterable[str]):
        self.used.update(names)

    def lookup_container(self, name: str) -> Optional[FrozenSet[str]]:
        """Return the member names of a known container, or None."""
        return self.containers.get(name)

    def is_used(self, name: str) -> bool:
        return name in self.used

    def all_definitions(self) -> List[Tuple[str, Property]]:
        """Return ``(name, defining node)`` pairs in insertion order."""
        return list(self.definitions.items())

    def unused_definitions(self) -> List[Tuple[str, Property]]:
        return [(name, node) for name, node in self.definitions.items() if name not in self.used]
