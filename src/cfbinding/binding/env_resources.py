"""
Resource lookups in a launch configuration's environment file.

The environment file is a dotenv file. Cloud-bound service instances are
listed under ``VCAP_SERVICES`` in the Cloud Foundry layout::

    VCAP_SERVICES='{"hana": [{"name": "my-hdi", "label": "hana", "tags": ["hana"], ...}]}'

Locally provided instances use the same layout under ``LOCAL_SERVICES``.
Both key names are configurable through :class:`Environment`.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from dotenv import dotenv_values, set_key

from cfbinding.config.environment import Environment
from cfbinding.config.logging_config import get_logger
from cfbinding.errors import ResourceEnvironmentError, UnbindError
from cfbinding.types.run_config import BindState, DependencyContext, RemovedResource

log = get_logger(__name__)


def _load_services(env_path: Path, values: Dict[str, Optional[str]], key: str) -> Dict[str, List[Dict[str, Any]]]:
    raw = values.get(key)
    if not raw:
        return {}
    try:
        services = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResourceEnvironmentError(env_path, f"{key} is not valid JSON ({e.msg})") from e
    if not isinstance(services, dict):
        raise ResourceEnvironmentError(env_path, f"{key} must be a JSON object")
    return services


def _iter_instances(services: Dict[str, Any]) -> Iterator[tuple[str, Dict[str, Any]]]:
    for group, instances in services.items():
        if not isinstance(instances, list):
            continue
        for instance in instances:
            if isinstance(instance, dict):
                yield group, instance


def _resource_keys(group: str, instance: Dict[str, Any]) -> List[str]:
    keys = [group]
    label = instance.get("label")
    if label:
        keys.append(label)
    keys.extend(tag for tag in instance.get("tags") or [] if isinstance(tag, str))
    return keys


def read_env_values(env_path: Path) -> Dict[str, Optional[str]]:
    if not env_path.is_file():
        raise ResourceEnvironmentError(env_path, "file does not exist")
    return dotenv_values(env_path, interpolate=False)


def get_env_resources(env_path: Path) -> Dict[str, BindState]:
    """
    Map every service group, label and tag in the environment file to its bind state.

    Cloud entries take precedence over local entries with the same key.

    Raises:
        ResourceEnvironmentError: If the file is missing or a services key
            does not hold a JSON object.
    """
    env_path = Path(env_path)
    values = read_env_values(env_path)

    resources: Dict[str, BindState] = {}
    for key, state in (
        (Environment.get_local_services_key(), BindState.LOCAL),
        (Environment.get_vcap_services_key(), BindState.CLOUD),
    ):
        for group, instance in _iter_instances(_load_services(env_path, values, key)):
            for name in _resource_keys(group, instance):
                resources[name] = state
    return resources


def _named(resource_name: str) -> Callable[[str, Dict[str, Any]], bool]:
    return lambda group, instance: instance.get("name") == resource_name


def _typed(dep_type: str) -> Callable[[str, Dict[str, Any]], bool]:
    return lambda group, instance: dep_type in _resource_keys(group, instance)


def _split(
    services: Dict[str, Any], matches: Callable[[str, Dict[str, Any]], bool]
) -> tuple[List[Dict[str, Any]], Dict[str, Any]]:
    removed: List[Dict[str, Any]] = []
    remaining: Dict[str, Any] = {}
    for group, instances in services.items():
        if not isinstance(instances, list):
            remaining[group] = instances
            continue
        kept = []
        for instance in instances:
            if isinstance(instance, dict) and matches(group, instance):
                removed.append(instance)
            else:
                kept.append(instance)
        if kept:
            remaining[group] = kept
    return removed, remaining


def remove_resource_from_env(env_path: Path, dep_context: DependencyContext) -> RemovedResource:
    """
    Remove the service instances satisfying ``dep_context`` from the environment file.

    Both ``VCAP_SERVICES`` and ``LOCAL_SERVICES`` are searched, so a dependency
    reported as cloud or local is no longer reported afterwards. Instances are
    matched by ``data.resource_name`` when the dependency names one and some
    instance carries that name; otherwise by group, label or tag, the same keys
    :func:`get_env_resources` reports. All matches are removed and the first
    one is reported, cloud before local.

    Returns:
        What was removed. Empty when nothing matched.

    Raises:
        UnbindError: If the environment file is missing or unreadable.
    """
    env_path = Path(env_path)
    keys = [Environment.get_vcap_services_key(), Environment.get_local_services_key()]
    try:
        values = read_env_values(env_path)
        services_by_key = {key: _load_services(env_path, values, key) for key in keys}
    except ResourceEnvironmentError as e:
        raise UnbindError(str(e)) from e

    resource_name = dep_context.binding_data.resource_name
    matchers = [_named(resource_name)] if resource_name else []
    matchers.append(_typed(dep_context.type))

    changes: Dict[str, tuple[List[Dict[str, Any]], Dict[str, Any]]] = {}
    for matches in matchers:
        for key, services in services_by_key.items():
            removed, remaining = _split(services, matches)
            if removed:
                changes[key] = (removed, remaining)
        if changes:
            break

    if not changes:
        log.debug(f"No '{dep_context.type}' resource found in {env_path}")
        return RemovedResource()

    for key, (_, remaining) in changes.items():
        set_key(env_path, key, json.dumps(remaining, separators=(",", ":")), quote_mode="always")
    first = next(iter(changes.values()))[0][0]
    log.info(f"Removed '{first.get('name')}' from {env_path}")
    return RemovedResource(
        resource_name=first.get("name"),
        env_path=str(env_path),
        resource_data=first,
    )


class EnvFileResourceReader:
    """Reads bind states from the dotenv environment file."""

    async def read(self, env_path: Path) -> Dict[str, BindState]:
        return await asyncio.to_thread(get_env_resources, Path(env_path))


class EnvFileServiceUnbinder:
    """Unbinds by removing the service instance from the environment file."""

    async def remove_resource(self, env_path: Path, dep_context: DependencyContext) -> RemovedResource:
        return await asyncio.to_thread(remove_resource_from_env, Path(env_path), dep_context)
