"""Ethconnect blockchain connector: configuration and compose services."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .connector import (
    STANDARD_LOG_OPTIONS,
    Connector,
    ConnectorConfig,
    Organization,
    Service,
    ServiceDefinition,
    Stack,
)

_PORT = 8080


def _drop_empty(entries: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in entries.items() if value}


def merge_config(base, extra):
    """Merge ``extra`` into ``base`` and return the result.

    Mappings merge key by key, lists are concatenated and any other value in
    ``extra`` replaces the one in ``base``. Merging a mapping with a
    non-mapping raises ``ValueError``. Neither argument is modified.
    """
    if extra is None:
        return base
    if base is None:
        return extra
    if isinstance(base, dict) or isinstance(extra, dict):
        if not (isinstance(base, dict) and isinstance(extra, dict)):
            raise ValueError(
                f"cannot merge {type(extra).__name__} into {type(base).__name__}"
            )
        merged = dict(base)
        for key, value in extra.items():
            merged[key] = merge_config(merged[key], value) if key in merged else value
        return merged
    if isinstance(base, list) and isinstance(extra, list):
        return base + extra
    return extra


@dataclass
class EthconnectConfig(ConnectorConfig):
    """The ethconnect REST gateway configuration file."""

    rpc_url: str = ""
    max_tx_wait_time: int = 0
    max_in_flight: int = 0
    event_polling_interval_sec: int = 0
    storage_path: str = ""
    events_db: str = ""
    http_port: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as YAML-ready data, leaving out empty settings."""
        rpc = _drop_empty({"url": self.rpc_url})
        openapi = _drop_empty(
            {
                "eventPollingIntervalSec": self.event_polling_interval_sec,
                "storagePath": self.storage_path,
                "eventsDB": self.events_db,
            }
        )
        http = _drop_empty({"port": self.http_port})
        gateway = _drop_empty(
            {
                "rpc": rpc,
                "openapi": openapi,
                "http": http,
                "maxTXWaitTime": self.max_tx_wait_time,
                "maxInFlight": self.max_in_flight,
            }
        )
        if not gateway:
            return {}
        return {"rest": {"rest-gateway": gateway}}

    def write_config(self, filename, extra_connector_config_path) -> None:
        """Write the configuration as YAML, then merge in an optional extra YAML file.

        Raises ``FileNotFoundError`` when the extra file does not exist.
        """
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.to_dict()
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        if extra_connector_config_path:
            with open(os.fspath(extra_connector_config_path), encoding="utf-8") as handle:
                extra = yaml.safe_load(handle)
            merged = merge_config(data, extra)
            path.write_text(yaml.safe_dump(merged, sort_keys=False))


class Ethconnect(Connector):
    """The ethconnect connector."""

    def name(self) -> str:
        return "ethconnect"

    def port(self) -> int:
        return _PORT

    def generate_config(
        self, stack: Stack, member: Organization, blockchain_service_name: str
    ) -> EthconnectConfig:
        """Build the REST gateway configuration pointing at the blockchain node."""
        return EthconnectConfig(
            rpc_url=f"http://{blockchain_service_name}:8545",
            max_tx_wait_time=60,
            max_in_flight=10,
            event_polling_interval_sec=1,
            storage_path="./data/abis",
            events_db="./data/events",
            http_port=_PORT,
        )

    def get_service_definitions(
        self, stack: Stack, dependent_services: dict[str, str]
    ) -> list[ServiceDefinition]:
        """Build one ethconnect compose service per stack member."""
        image = stack.version_manifest["ethconnect"].docker_image_string()
        definitions = []
        for index, member in enumerate(stack.members):
            depends_on = {
                dependency: {"condition": state}
                for dependency, state in dependent_services.items()
            }
            service = Service(
                image=image,
                container_name=f"{stack.name}_ethconnect_{index}",
                command="server -f ./config/config.yaml -d 2",
                depends_on=depends_on,
                ports=[f"{member.exposed_connector_port}:{_PORT}"],
                volumes=[
                    f"ethconnect_config_{member.id}:/ethconnect/config",
                    f"ethconnect_data_{member.id}:/ethconnect/data",
                ],
                logging=STANDARD_LOG_OPTIONS,
                environment=stack.environment_vars,
            )
            definitions.append(
                ServiceDefinition(
                    service_name=f"ethconnect_{member.id}",
                    service=service,
                    volume_names=[
                        f"ethconnect_config_{member.id}",
                        f"ethconnect_data_{member.id}",
                    ],
                )
            )
        return definitions