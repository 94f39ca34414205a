"""EVMConnect blockchain connector: configuration and compose services."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
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
from .ethconnect import merge_config

_PORT = 5008


def _drop_empty(entries: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in entries.items() if value}


def core_url(org: Organization) -> str:
    """Return the URL at which the connector reaches the member's FireFly core."""
    host = "host.docker.internal" if org.external else f"firefly_core_{org.id}"
    return f"http://{host}:{org.exposed_firefly_port}"


@dataclass
class EvmconnectConfig(ConnectorConfig):
    """The evmconnect configuration file.

    Metrics are only written when ``metrics_enabled`` is set. Confirmations and
    the fixed gas price are written whenever they are not ``None``, zero included.
    """

    log_level: str = ""
    connector_url: str = ""
    metrics_enabled: bool = False
    metrics_port: int = 0
    metrics_address: str = ""
    metrics_public_url: str = ""
    metrics_path: str = ""
    leveldb_path: str = ""
    ffcore_url: str = ""
    ffcore_namespaces: list[str] = field(default_factory=list)
    required_confirmations: int | None = None
    fixed_gas_price: int | None = None
    gas_oracle_mode: str = ""
    api_port: int = 0
    api_address: str = ""
    api_public_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as YAML-ready data, leaving out empty settings."""
        result: dict[str, Any] = {}
        log = _drop_empty({"level": self.log_level})
        if log:
            result["log"] = log
        connector = _drop_empty({"url": self.connector_url})
        if connector:
            result["connector"] = connector
        if self.metrics_enabled:
            result["metrics"] = _drop_empty(
                {
                    "port": self.metrics_port,
                    "address": self.metrics_address,
                    "publicURL": self.metrics_public_url,
                    "enabled": self.metrics_enabled,
                    "path": self.metrics_path,
                }
            )
        leveldb = _drop_empty({"path": self.leveldb_path})
        if leveldb:
            result["persistence"] = {"leveldb": leveldb}
        ffcore = _drop_empty(
            {"url": self.ffcore_url, "namespaces": list(self.ffcore_namespaces)}
        )
        if ffcore:
            result["ffcore"] = ffcore
        if self.required_confirmations is not None:
            result["confirmations"] = {"required": self.required_confirmations}
        policy: dict[str, Any] = {}
        if self.fixed_gas_price is not None:
            policy["fixedGasPrice"] = self.fixed_gas_price
        if self.gas_oracle_mode:
            policy["gasOracle"] = {"mode": self.gas_oracle_mode}
        if policy:
            result["policyengine.simple"] = policy
        api = _drop_empty(
            {
                "port": self.api_port,
                "address": self.api_address,
                "publicURL": self.api_public_url,
            }
        )
        if api:
            result["api"] = api
        return result

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


class Evmconnect(Connector):
    """The evmconnect connector."""

    def name(self) -> str:
        return "evmconnect"

    def port(self) -> int:
        return _PORT

    def generate_config(
        self, stack: Stack, org: Organization, blockchain_service_name: str
    ) -> EvmconnectConfig:
        """Build the connector configuration for one member."""
        config = EvmconnectConfig(
            log_level="debug",
            api_port=self.port(),
            api_address="0.0.0.0",
            api_public_url=f"http://127.0.0.1:{org.exposed_connector_port}",
            connector_url=f"http://{blockchain_service_name}:8545",
            leveldb_path="/evmconnect/data/leveldb",
            ffcore_url=core_url(org),
            ffcore_namespaces=["default"],
            required_confirmations=0,
            fixed_gas_price=0,
            gas_oracle_mode="fixed",
        )
        if stack.prometheus_enabled:
            config.metrics_enabled = True
            config.metrics_port = org.exposed_connector_metrics_port
            config.metrics_address = "0.0.0.0"
            config.metrics_public_url = (
                f"http://127.0.0.1:{org.exposed_connector_metrics_port}"
            )
            config.metrics_path = "/metrics"
        return config

    def get_service_definitions(
        self, stack: Stack, dependent_services: dict[str, str]
    ) -> list[ServiceDefinition]:
        """Build one evmconnect compose service per stack member."""
        image = stack.version_manifest["evmconnect"].docker_image_string()
        definitions = []
        for index, member in enumerate(stack.members):
            depends_on = {
                dependency: {"condition": state}
                for dependency, state in dependent_services.items()
            }
            data_volume = f"evmconnect_data_{member.id}"
            service = Service(
                image=image,
                container_name=f"{stack.name}_evmconnect_{index}",
                command="-f /evmconnect/config.yaml",
                depends_on=depends_on,
                ports=[f"{member.exposed_connector_port}:{self.port()}"],
                volumes=[
                    f"{stack.runtime_dir}/config/evmconnect_{member.id}.yaml:/evmconnect/config.yaml",
                    f"{data_volume}:/evmconnect/data",
                ],
                logging=STANDARD_LOG_OPTIONS,
                environment=stack.environment_vars,
            )
            definitions.append(
                ServiceDefinition(
                    service_name=f"evmconnect_{member.id}",
                    service=service,
                    volume_names=[data_volume],
                )
            )
        return definitions