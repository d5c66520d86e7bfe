"""
Dependency handler: binds and unbinds Cloud Foundry services for a launch
configuration.

A handler never raises to its caller. Collaborator failures become an error
notice plus a ``None`` result (or ``BindState.NOTBOUND`` for state queries),
so a caller resolving many dependencies can treat each one independently.
"""

from __future__ import annotations

from typing import List, Optional

from cfbinding import messages
from cfbinding.binding.collaborators import Collaborators
from cfbinding.binding.outcome import Failure, capture
from cfbinding.config.logging_config import get_logger
from cfbinding.types.run_config import (
    BindContext,
    BindResult,
    BindState,
    BoundResource,
    InstanceMetadata,
    RemovedResource,
    ServiceTypeSpec,
    TaskDescriptor,
)
from cfbinding.usage.usage_tracker import CF_TOOLS_CATEGORY, CHISEL_TASK_EVENT

log = get_logger(__name__)

INSTANCE_SEPARATOR = "&"


def _as_task(value) -> Optional[TaskDescriptor]:
    if value is None:
        return None
    return TaskDescriptor.model_validate(value)


def _as_resource(value) -> BoundResource:
    info = RemovedResource.model_validate(value or {})
    resource_data = info.resource_data or {}
    return BoundResource(
        name=info.resource_name or "",
        type=resource_data.get("label") or "",
        data=resource_data,
    )


class DependencyHandler:
    """
    Resolves, binds and unbinds one kind of dependency.

    The handler holds no state besides its registration id and the
    collaborators it was built with. The only object it mutates is the
    caller's ``config_data``, and only by appending a tunnel task to its
    dependent task list during :meth:`bind`.
    """

    __slots__ = ("_id", "_collaborators")

    def __init__(self, handler_id: str, collaborators: Optional[Collaborators] = None):
        self._id = handler_id
        self._collaborators = collaborators or Collaborators()

    def get_id(self) -> str:
        return self._id

    @property
    def collaborators(self) -> Collaborators:
        return self._collaborators

    async def get_bind_state(self, context: BindContext) -> BindState:
        """Return where the dependency is bound according to the environment file."""
        dep_type = context.dep_context.type
        resources = (
            await capture(self._collaborators.resource_reader.read, context.env_path)
        ).map(lambda value: (value or {}).get(dep_type))
        if isinstance(resources, Failure):
            log.warning(f"Reading resources from {context.env_path} failed: {resources.message}")
            await self._show_error(resources.message)
            return BindState.NOTBOUND

        state = resources.value
        if not state:
            return BindState.NOTBOUND
        try:
            return BindState(state)
        except (TypeError, ValueError):
            log.warning(f"Unknown bind state '{state}' for '{dep_type}' in {context.env_path}")
            return BindState.NOTBOUND

    def get_service_types(self, context: BindContext) -> List[ServiceTypeSpec]:
        data = context.dep_context.binding_data
        return [
            ServiceTypeSpec(
                name=context.dep_context.type,
                plan=data.plan or "",
                tag=data.tag,
                prompt="",
            )
        ]

    async def bind(self, context: BindContext) -> Optional[BindResult]:
        """
        Bind a service instance for the dependency.

        Returns None when nothing was bound, either because the binder
        returned no instance or because a step failed (an error notice is
        shown in that case).
        """
        collaborators = self._collaborators
        service_types = self.get_service_types(context)

        instances = await capture(collaborators.service_binder.bind_service, service_types)
        if isinstance(instances, Failure):
            return await self._fail("Binding", context, instances)
        if not instances.value:
            log.debug(f"No instance bound for '{context.dep_context.type}'")
            return None
        instance_ids = list(instances.value)

        metadata = (
            await capture(collaborators.metadata_provider.get_instance_metadata, instance_ids[0])
        ).map(InstanceMetadata.model_validate)
        if isinstance(metadata, Failure):
            return await self._fail("Binding", context, metadata)
        resource = BoundResource(name=metadata.value.service_name, type=metadata.value.service)

        if context.dep_context.binding_data.is_create_chisel_task:
            task = (
                await capture(
                    collaborators.tunnel_task_manager.create_or_reuse,
                    context.env_path,
                    INSTANCE_SEPARATOR.join(instance_ids),
                )
            ).map(_as_task)
            if isinstance(task, Failure):
                return await self._fail("Creating the tunnel task", context, task)
            if task.value is not None:
                await self._chain_tunnel_task(context, task.value)

        log.info(f"Bound '{resource.name}' ({resource.type}) for runnable '{context.runnable_id}'")
        return BindResult(config_data=context.config_data, resource=resource)

    async def unbind(self, context: BindContext) -> Optional[BindResult]:
        """Remove the bound resource from the environment file."""
        removed = (
            await capture(
                self._collaborators.service_unbinder.remove_resource,
                context.env_path,
                context.dep_context,
            )
        ).map(_as_resource)
        if isinstance(removed, Failure):
            return await self._fail("Unbinding", context, removed)

        resource = removed.value
        await self._show_information(messages.service_unbound_successful(resource.name))
        log.info(f"Unbound '{resource.name}' for runnable '{context.runnable_id}'")
        return BindResult(config_data=context.config_data, resource=resource)

    async def _chain_tunnel_task(self, context: BindContext, task: TaskDescriptor) -> None:
        tracked = await capture(
            self._collaborators.usage_tracker.track_chisel_task,
            CHISEL_TASK_EVENT,
            [CF_TOOLS_CATEGORY],
        )
        if isinstance(tracked, Failure):
            log.debug(f"Usage tracking failed: {tracked.message}")

        context.config_data.append_dependent_task(task)
        if task.label:
            await self._show_information(messages.chisel_task_created(task.label))

    async def _fail(self, action: str, context: BindContext, failure: Failure) -> None:
        log.warning(f"{action} '{context.dep_context.type}' failed: {failure.message}")
        await self._show_error(failure.message)
        return None

    async def _show_information(self, message: str) -> None:
        shown = await capture(self._collaborators.notifier.show_information, message)
        if isinstance(shown, Failure):
            log.warning(f"Could not show notice '{message}': {shown.message}")

    async def _show_error(self, message: str) -> None:
        shown = await capture(self._collaborators.notifier.show_error, message)
        if isinstance(shown, Failure):
            log.warning(f"Could not show error '{message}': {shown.message}")

    def __repr__(self) -> str:
        return f"DependencyHandler(id={self._id!r})"
