"""Registry routing dependency descriptors to their handlers by id."""

from typing import Dict, Iterable, List, Optional

from cfbinding.binding.handler import DependencyHandler
from cfbinding.config.logging_config import get_logger
from cfbinding.errors import HandlerNotFoundError
from cfbinding.types.run_config import DependencyContext

log = get_logger(__name__)


class HandlerRegistry:
    """Holds any number of dependency handlers, keyed by their id."""

    def __init__(self, handlers: Optional[Iterable[DependencyHandler]] = None):
        self._handlers: Dict[str, DependencyHandler] = {}
        for handler in handlers or []:
            self.register(handler)

    def register(self, handler: DependencyHandler) -> DependencyHandler:
        handler_id = handler.get_id()
        if handler_id in self._handlers:
            log.warning(f"Replacing dependency handler '{handler_id}'")
        self._handlers[handler_id] = handler
        return handler

    def unregister(self, handler_id: str) -> None:
        self._handlers.pop(handler_id, None)

    def get(self, handler_id: str) -> DependencyHandler:
        """
        Return the handler registered under ``handler_id``.

        Raises:
            HandlerNotFoundError: If no handler has that id
        """
        handler = self._handlers.get(handler_id)
        if handler is None:
            raise HandlerNotFoundError(handler_id)
        return handler

    def for_dependency(self, dep_context: DependencyContext) -> DependencyHandler:
        return self.get(dep_context.dependency_handler_id)

    def ids(self) -> List[str]:
        return list(self._handlers)

    def __contains__(self, handler_id: str) -> bool:
        return handler_id in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
