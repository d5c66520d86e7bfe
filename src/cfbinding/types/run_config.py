"""
Run configuration models exchanged between a dependency handler and its caller.

Field names are snake_case in Python and camelCase on the wire, matching the
launch configuration JSON (``runnableId``, ``dependentTasks``,
``isCreateChiselTask`` ...). Both spellings are accepted on input.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BindState(str, Enum):
    """Where a dependency is bound, if anywhere."""

    CLOUD = "cloud"
    LOCAL = "local"
    NOTBOUND = "notbound"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskDescriptor(_CamelModel):
    """A background task chained to a launch configuration."""

    model_config = ConfigDict(extra="allow")

    label: Optional[str] = Field(None, description="Display label of the task")
    type: str = Field("", description="Task type, e.g. 'chisel'")
    data: Dict[str, Any] = Field(default_factory=dict, description="Task specific payload")


class ConfigData(_CamelModel):
    """
    The live launch configuration plus its dependent background tasks.

    The caller owns this object. A bind may append to ``dependent_tasks``;
    nothing else in it is modified by a handler.
    """

    model_config = ConfigDict(extra="allow")

    config: Dict[str, Any] = Field(default_factory=dict, description="Launch configuration")
    dependent_tasks: Optional[List[TaskDescriptor]] = Field(
        None, description="Ordered dependent tasks; absent until the first append"
    )

    def append_dependent_task(self, task: TaskDescriptor) -> None:
        if self.dependent_tasks is None:
            self.dependent_tasks = []
        self.dependent_tasks.append(task)


class DependencyData(_CamelModel):
    """Binding parameters carried by a dependency. Every field is optional."""

    model_config = ConfigDict(extra="allow")

    plan: Optional[str] = None
    resource_tag: Optional[str] = None
    resource_name: Optional[str] = None
    is_create_chisel_task: bool = False

    @property
    def tag(self) -> str:
        """Broker tag: resource tag followed by resource name, or empty."""
        if self.resource_tag:
            return self.resource_tag + (self.resource_name or "")
        return ""


class DependencyContext(_CamelModel):
    """Describes one dependency of a launch configuration."""

    type: str = Field(..., description="Dependency type, e.g. 'hana'")
    display_name: str = ""
    display_type: str = ""
    bindable: bool = True
    dependency_handler_id: str = ""
    data: Optional[DependencyData] = None

    @property
    def binding_data(self) -> DependencyData:
        return self.data if self.data is not None else DependencyData()


class BindContext(_CamelModel):
    """Input of a bind or unbind call."""

    runnable_id: str = ""
    config_data: ConfigData
    env_path: Path
    dep_context: DependencyContext


class ServiceTypeSpec(_CamelModel):
    """One service type requested from the service binder."""

    name: str
    plan: str = ""
    tag: str = ""
    prompt: str = ""


class InstanceMetadata(_CamelModel):
    service_name: str
    service: str


class RemovedResource(_CamelModel):
    """What the unbinder removed. Any field may be missing."""

    resource_name: Optional[str] = None
    env_path: Optional[str] = None
    resource_data: Optional[Dict[str, Any]] = None


class BoundResource(_CamelModel):
    name: str
    type: str
    data: Optional[Dict[str, Any]] = None


class BindResult(_CamelModel):
    """Returned after a successful bind or unbind."""

    config_data: ConfigData
    resource: BoundResource
