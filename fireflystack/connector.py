"""Stack model shared by the connectors, and the interface each connector implements."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any

STANDARD_LOG_OPTIONS: dict[str, Any] = {
    "driver": "json-file",
    "options": {"max-size": "10m", "max-file": "1"},
}


@dataclass
class ManifestEntry:
    """A pinned container image for one stack component."""

    image: str
    tag: str = ""
    sha: str = ""

    def docker_image_string(self) -> str:
        """Return the image reference to put in a compose file."""
        if self.sha:
            return f"{self.image}@sha256:{self.sha}"
        if self.tag:
            return f"{self.image}:{self.tag}"
        return self.image


@dataclass
class Organization:
    """One member of a stack."""

    id: str
    exposed_connector_port: int = 0
    exposed_firefly_port: int = 0
    exposed_connector_metrics_port: int = 0
    external: bool = False
    account: Any = None


@dataclass
class Stack:
    """The parts of a stack that connectors need to configure themselves."""

    name: str = ""
    members: list[Organization] = field(default_factory=list)
    version_manifest: dict[str, ManifestEntry] = field(default_factory=dict)
    environment_vars: dict[str, Any] = field(default_factory=dict)
    runtime_dir: str = ""
    prometheus_enabled: bool = False


@dataclass
class Service:
    """A single docker compose service."""

    image: str = ""
    container_name: str = ""
    command: str = ""
    depends_on: dict[str, dict[str, str]] = field(default_factory=dict)
    ports: list[str] = field(default_factory=list)
    volumes: list[str] = field(default_factory=list)
    logging: dict[str, Any] | None = None
    environment: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the compose mapping, leaving out empty settings."""
        entries = {
            "image": self.image,
            "container_name": self.container_name,
            "command": self.command,
            "depends_on": self.depends_on,
            "ports": self.ports,
            "volumes": self.volumes,
            "logging": self.logging,
            "environment": self.environment,
        }
        return {key: value for key, value in entries.items() if value}


@dataclass
class ServiceDefinition:
    """A compose service together with the named volumes it uses."""

    service_name: str
    service: Service
    volume_names: list[str] = field(default_factory=list)


class ConnectorConfig(abc.ABC):
    """Configuration that a connector writes to disk."""

    @abc.abstractmethod
    def write_config(self, filename, extra_connector_config_path):
        """Write the configuration, merging in an optional extra YAML file."""


class Connector(abc.ABC):
    """A blockchain connector that runs alongside each stack member."""

    @abc.abstractmethod
    def name(self) -> str:
        """Short name of the connector."""

    @abc.abstractmethod
    def port(self) -> int:
        """Port the connector listens on inside its container."""

    @abc.abstractmethod
    def generate_config(self, stack, member, blockchain_service_name) -> ConnectorConfig:
        """Build the connector configuration for one member."""

    @abc.abstractmethod
    def get_service_definitions(self, stack, dependent_services) -> list[ServiceDefinition]:
        """Build one compose service per stack member."""