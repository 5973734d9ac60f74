"""
Type Registry for fragql.

The TypeRegistry collects independently declared fragments (object types and
Query/Mutation extensions) into one ordered list that the compiler consumes.
It provides:
- Registration in declaration order
- Immediate detection of duplicate type names and colliding root fields
- An immutable snapshot of the entries for compilation
- Freeze mechanism to prevent modifications once the schema serves traffic

Invariants:
    - Registry is mutable during startup, frozen before serving
    - Concrete type names are unique; Query and Mutation are reserved
    - A root field name is contributed by at most one extension
    - Type references are NOT resolved here (forward references are fine)

How to change safely:
    - Register all fragments before compiling
    - Never modify registered definitions after freeze

Example:
    >>> registry = TypeRegistry()
    >>> registry.register(Post)
    >>> registry.register(extend_query(field("drafts", "[Post!]!", resolve=drafts)))
    >>> schema = compile_schema(registry.entries())
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Iterator, Tuple

from ..errors import RegistrationError, RegistryFrozenError
from .types import ROOT_TYPES, Definition, ExtensionDefinition, ObjectTypeDefinition

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Ordered collection of schema fragments.

    Thread-safety:
        - Registration is thread-safe (uses internal lock)
        - Freeze is atomic and irreversible

    Attributes:
        frozen: Whether the registry is frozen (immutable)
    """

    def __init__(self) -> None:
        """Initialize an empty, mutable registry."""
        self._entries: list[Definition] = []
        self._type_names: set[str] = set()
        # (root, field name) -> index of the extension that contributed it
        self._root_fields: Dict[Tuple[str, str], int] = {}
        self._frozen = False
        self._lock = threading.Lock()

    @property
    def frozen(self) -> bool:
        """Whether the registry is frozen."""
        return self._frozen

    def register(self, definition: Definition) -> None:
        """Register an object type or a root extension.

        Args:
            definition: ObjectTypeDefinition or ExtensionDefinition

        Raises:
            RegistryFrozenError: If registry is frozen
            RegistrationError: If the type name is taken, reserved, or an
                extension field collides with one already on its root
            TypeError: If definition is neither kind of fragment
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    f"Cannot register '{getattr(definition, 'name', definition)}': registry is frozen"
                )

            if isinstance(definition, ObjectTypeDefinition):
                self._register_type(definition)
            elif isinstance(definition, ExtensionDefinition):
                self._register_extension(definition)
            else:
                raise TypeError(
                    f"Expected ObjectTypeDefinition or ExtensionDefinition, "
                    f"got {type(definition).__name__}"
                )

    def _register_type(self, definition: ObjectTypeDefinition) -> None:
        if definition.name in ROOT_TYPES:
            raise RegistrationError(
                f"Type name '{definition.name}' is reserved; use an extension to add root fields",
                type_name=definition.name,
            )
        if definition.name in self._type_names:
            raise RegistrationError(
                f"Type name '{definition.name}' already registered",
                type_name=definition.name,
            )

        self._type_names.add(definition.name)
        self._entries.append(definition)
        logger.debug(
            f"Registered object type: {definition.name} ({len(definition.fields)} fields)"
        )

    def _register_extension(self, definition: ExtensionDefinition) -> None:
        for f in definition.fields:
            key = (definition.root, f.name)
            if key in self._root_fields:
                raise RegistrationError(
                    f"Field '{definition.root}.{f.name}' already contributed by "
                    f"extension #{self._root_fields[key]}",
                    type_name=definition.root,
                )

        index = len(self._entries)
        for f in definition.fields:
            self._root_fields[(definition.root, f.name)] = index
        self._entries.append(definition)
        logger.debug(
            f"Registered {definition.root} extension: "
            f"{', '.join(f.name for f in definition.fields)}"
        )

    def register_all(self, definitions: Iterable[Definition]) -> None:
        """Register several fragments in order."""
        for definition in definitions:
            self.register(definition)

    def entries(self) -> tuple[Definition, ...]:
        """Immutable snapshot of the registered fragments, in declaration order."""
        with self._lock:
            return tuple(self._entries)

    def freeze(self) -> None:
        """Freeze the registry.

        Raises:
            RegistryFrozenError: If already frozen
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is already frozen")
            self._frozen = True
            logger.info(
                f"Type registry frozen with {len(self._type_names)} object types, "
                f"{len(self._root_fields)} root fields"
            )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Definition]:
        return iter(self.entries())
