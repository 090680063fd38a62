"""
Name-based registries.

A registry maps names to constructors (or to shared immutable objects)
and builds instances on demand. Registries are plain objects: each
``FactoryManager`` owns its own set, so registering a custom term in one
manager never leaks into another.
"""

from typing import Callable, Generic, Iterator, Optional, TypeVar

from fuzzinfer import get_logger
from fuzzinfer.errors import ConfigurationError, ErrorCodes

logger = get_logger(__name__)

T = TypeVar("T")


class Registry(Generic[T]):
    """
    Ordered mapping of names to constructors.

    Subclasses populate the registry in ``__init__`` and may override
    ``_build`` when entries are not plain constructors.
    """

    kind = "object"

    def __init__(self) -> None:
        self._entries: dict[str, Callable[[], T]] = {}

    def register(self, name: str, entry: Callable[[], T]) -> None:
        """Register (or replace) the entry stored under ``name``."""
        if name in self._entries:
            logger.debug(f"Replacing {self.kind} <{name}> in registry")
        self._entries[name] = entry

    def deregister(self, name: str) -> None:
        self._entries.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._entries

    def available(self) -> list[str]:
        return list(self._entries)

    def get(self, name: str) -> Optional[Callable[[], T]]:
        """Return the raw entry for ``name``, or None when not registered."""
        return self._entries.get(name)

    def construct(self, name: str) -> T:
        """
        Build a new instance of the entry registered under ``name``.

        Args:
            name: Registered name

        Returns:
            A new instance

        Raises:
            ConfigurationError: If the name is not registered
        """
        entry = self._entries.get(name)
        if entry is None:
            logger.error(f"Unknown {self.kind} requested: {name}")
            raise ConfigurationError(
                message=f"[factory error] {self.kind} <{name}> not registered",
                error_code=ErrorCodes.FACTORY_UNKNOWN_NAME,
                details={"name": name, "available": self.available()},
                suggestion=f"Use one of: {', '.join(self.available())}",
            )
        return self._build(entry)

    def _build(self, entry: Callable[[], T]) -> T:
        return entry()

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.available()})"
