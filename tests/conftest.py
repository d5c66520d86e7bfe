from unittest.mock import AsyncMock

import pytest

from cfbinding.binding.collaborators import Collaborators
from cfbinding.config.environment import Environment
from cfbinding.types.run_config import (
    BindContext,
    ConfigData,
    DependencyContext,
    DependencyData,
    InstanceMetadata,
)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch, tmp_path):
    """Keep settings files and .env files of the developer out of the tests."""
    monkeypatch.chdir(tmp_path)
    Environment.settings = {}
    yield
    Environment.reset()


@pytest.fixture
def bind_context(tmp_path):
    return BindContext(
        runnable_id="",
        config_data=ConfigData(config={"data": {"type": "launch"}}),
        env_path=tmp_path / "space" / ".env",
        dep_context=DependencyContext(
            type="hdi_type",
            display_name="",
            bindable=True,
            display_type="dysplayType",
            dependency_handler_id="dependencyHandlerId",
            data=DependencyData(resource_tag="res-tag", resource_name="res-name"),
        ),
    )


@pytest.fixture
def collaborators():
    """Collaborators whose every call is an AsyncMock."""
    return Collaborators(
        resource_reader=AsyncMock(),
        service_binder=AsyncMock(),
        metadata_provider=AsyncMock(
            **{
                "get_instance_metadata.return_value": InstanceMetadata(
                    service_name="testInstance", service="resourceType"
                )
            }
        ),
        service_unbinder=AsyncMock(),
        tunnel_task_manager=AsyncMock(),
        usage_tracker=AsyncMock(),
        notifier=AsyncMock(),
    )
