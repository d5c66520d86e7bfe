"""
Chisel tunnel tasks.

A chisel task opens a VPN tunnel to the Cloud Foundry space so that services
bound in the cloud are reachable from a local run. One task per environment
file is enough; later binds against the same environment reuse it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from cfbinding.config.environment import Environment
from cfbinding.config.logging_config import get_logger
from cfbinding.errors import TaskRegistryError
from cfbinding.types.run_config import TaskDescriptor

log = get_logger(__name__)

CHISEL_LABEL_PREFIX = "chisel-"


def chisel_task_label(env_path: Path) -> str:
    """Label of the tunnel task for an environment file, named after its space folder."""
    space = Path(env_path).resolve().parent.name or "default"
    return f"{CHISEL_LABEL_PREFIX}{space}"


class ChiselTaskManager:
    """
    Creates chisel tasks, at most one per environment file.

    ``create_or_reuse`` returns the new task descriptor, or None when a task
    for the environment already exists and can be reused as is.
    """

    def __init__(self, task_type: Optional[str] = None):
        self.task_type = task_type or Environment.get_chisel_task_type()
        self._tasks: Dict[Path, TaskDescriptor] = {}

    async def create_or_reuse(self, env_path: Path, instance_ids: str) -> Optional[TaskDescriptor]:
        if not instance_ids:
            raise TaskRegistryError("Cannot create a tunnel task without service instances")

        key = Path(env_path).resolve()
        existing = self._tasks.get(key)
        if existing is not None:
            log.debug(f"Reusing tunnel task '{existing.label}' for {key}")
            return None

        task = TaskDescriptor(
            label=chisel_task_label(key),
            type=self.task_type,
            data={
                "envPath": str(key),
                "instances": instance_ids.split("&"),
            },
        )
        self._tasks[key] = task
        log.info(f"Created tunnel task '{task.label}' for {key}")
        return task

    def get(self, env_path: Path) -> Optional[TaskDescriptor]:
        return self._tasks.get(Path(env_path).resolve())

    def remove(self, env_path: Path) -> Optional[TaskDescriptor]:
        return self._tasks.pop(Path(env_path).resolve(), None)

    def tasks(self) -> List[TaskDescriptor]:
        return list(self._tasks.values())
