"""User-facing message catalog."""

from typing import Optional


def service_unbound_successful(service_name: Optional[str]) -> str:
    return f"Service '{service_name or ''}' has been successfully unbound."


def chisel_task_created(label: str) -> str:
    return (
        "A task for opening the VPN tunnel to the Cloud Foundry space has been created. "
        f"Name: '{label}'"
    )


def no_service_binder() -> str:
    return "No service binder is configured for binding Cloud Foundry services."


def no_metadata_provider() -> str:
    return "No instance metadata provider is configured."
