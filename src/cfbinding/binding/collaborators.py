"""
Interfaces of the services a dependency handler delegates to.

Implementations may be sync or async; the handler awaits whatever a call
returns when it is awaitable. Every call may raise, and the handler turns
raised errors into user notices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Protocol, Sequence

from cfbinding import messages
from cfbinding.errors import CFBindingError
from cfbinding.types.run_config import (
    BindState,
    DependencyContext,
    InstanceMetadata,
    RemovedResource,
    ServiceTypeSpec,
    TaskDescriptor,
)


class ResourceEnvironmentReader(Protocol):
    """Reads which dependency types an environment file already binds."""

    async def read(self, env_path: Path) -> Mapping[str, BindState]: ...


class ServiceBinder(Protocol):
    """Binds service instances for the requested service types.

    Returns the created or selected instance names; an empty list means the
    user cancelled or nothing matched.
    """

    async def bind_service(self, service_types: Sequence[ServiceTypeSpec]) -> List[str]: ...


class InstanceMetadataProvider(Protocol):
    async def get_instance_metadata(self, instance_id: str) -> InstanceMetadata: ...


class ServiceUnbinder(Protocol):
    """Removes a bound resource from an environment file."""

    async def remove_resource(
        self, env_path: Path, dep_context: DependencyContext
    ) -> RemovedResource: ...


class TunnelTaskManager(Protocol):
    """Creates a tunnel task for an environment, or returns None when none is needed."""

    async def create_or_reuse(
        self, env_path: Path, instance_ids: str
    ) -> Optional[TaskDescriptor]: ...


class UsageTracker(Protocol):
    async def track_chisel_task(self, label: str, categories: List[str]) -> None: ...


class Notifier(Protocol):
    """User-facing notice channel."""

    async def show_information(self, message: str) -> None: ...

    async def show_error(self, message: str) -> None: ...


class UnconfiguredServiceBinder:
    """Placeholder binder for handlers built without a broker client."""

    async def bind_service(self, service_types: Sequence[ServiceTypeSpec]) -> List[str]:
        raise CFBindingError(messages.no_service_binder())


class UnconfiguredMetadataProvider:
    async def get_instance_metadata(self, instance_id: str) -> InstanceMetadata:
        raise CFBindingError(messages.no_metadata_provider())


def _default_reader() -> ResourceEnvironmentReader:
    from cfbinding.binding.env_resources import EnvFileResourceReader

    return EnvFileResourceReader()


def _default_unbinder() -> ServiceUnbinder:
    from cfbinding.binding.env_resources import EnvFileServiceUnbinder

    return EnvFileServiceUnbinder()


def _default_tunnel_manager() -> TunnelTaskManager:
    from cfbinding.binding.chisel import ChiselTaskManager

    return ChiselTaskManager()


def _default_usage_tracker() -> UsageTracker:
    from cfbinding.usage.usage_tracker import LoggingUsageTracker

    return LoggingUsageTracker()


def _default_notifier() -> Notifier:
    from cfbinding.binding.notifier import LoggingNotifier

    return LoggingNotifier()


@dataclass(frozen=True)
class Collaborators:
    """The full set of services a :class:`DependencyHandler` calls."""

    resource_reader: ResourceEnvironmentReader = field(default_factory=_default_reader)
    service_binder: ServiceBinder = field(default_factory=UnconfiguredServiceBinder)
    metadata_provider: InstanceMetadataProvider = field(
        default_factory=UnconfiguredMetadataProvider
    )
    service_unbinder: ServiceUnbinder = field(default_factory=_default_unbinder)
    tunnel_task_manager: TunnelTaskManager = field(default_factory=_default_tunnel_manager)
    usage_tracker: UsageTracker = field(default_factory=_default_usage_tracker)
    notifier: Notifier = field(default_factory=_default_notifier)
