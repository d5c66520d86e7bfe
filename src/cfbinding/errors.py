"""Exceptions raised by cfbinding collaborators and registries."""


class CFBindingError(Exception):
    """Base class for cfbinding errors."""


class ResourceEnvironmentError(CFBindingError):
    """The environment file could not be read or parsed."""

    def __init__(self, env_path, reason: str):
        self.env_path = env_path
        self.reason = reason
        super().__init__(f"Cannot read resources from '{env_path}': {reason}")


class UnbindError(CFBindingError):
    """A resource could not be removed from the environment file."""


class HandlerNotFoundError(CFBindingError, KeyError):
    """No dependency handler is registered under the requested id."""

    def __init__(self, handler_id: str):
        self.handler_id = handler_id
        super().__init__(f"Dependency handler '{handler_id}' not found")

    def __str__(self) -> str:
        return str(self.args[0])


class TaskRegistryError(CFBindingError):
    """The tunnel task registry could not create or look up a task."""
