# Standard library imports
from typing import Any, Callable, Dict


class BaseContainer:
    """
    Minimal service container.

    Keys are usually classes (a domain interface or a use case) but plain
    strings work too, e.g. for database collections.
    """

    def __init__(self) -> None:
        self._singletons: Dict[Any, Any] = {}
        self._factories: Dict[Any, Callable[[], Any]] = {}

    def register_singleton(self, key: Any, instance: Any) -> None:
        """Register an already-built instance, returned as-is on every get()"""
        self._singletons[key] = instance

    def register_factory(self, key: Any, factory: Callable[[], Any]) -> None:
        """Register a factory called on every get() (use cases are built per request)"""
        self._factories[key] = factory

    def has(self, key: Any) -> bool:
        return key in self._singletons or key in self._factories

    def get(self, key: Any) -> Any:
        """
        Resolve a dependency

        Raises:
            ValueError: If nothing is registered under key
        """
        if key in self._singletons:
            return self._singletons[key]
        if key in self._factories:
            return self._factories[key]()
        name = getattr(key, "__name__", str(key))
        raise ValueError(f"No registration found for {name}")
