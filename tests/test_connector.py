import pytest

from fireflystack.connector import (
    STANDARD_LOG_OPTIONS,
    Connector,
    ConnectorConfig,
    ManifestEntry,
    Organization,
    Service,
    ServiceDefinition,
    Stack,
)


def test_image_string_with_tag():
    entry = ManifestEntry(image="ghcr.io/example/ethconnect", tag="v3")
    assert entry.docker_image_string() == "ghcr.io/example/ethconnect:v3"


def test_image_string_prefers_digest_over_tag():
    entry = ManifestEntry(image="example/evmconnect", tag="v1", sha="abc123")
    result = entry.docker_image_string()
    assert result.startswith("example/evmconnect@")
    assert result.endswith("abc123")
    assert ":v1" not in result


def test_image_string_plain():
    entry = ManifestEntry(image="example/core")
    assert entry.docker_image_string() == "example/core"


def test_service_to_dict_omits_empty_values():
    service = Service(image="example/core")
    assert service.to_dict() == {"image": "example/core"}


def test_service_to_dict_keeps_all_set_values():
    service = Service(
        image="img",
        container_name="stack_core_0",
        command="run",
        depends_on={"db": {"condition": "service_started"}},
        ports=["5000:5000"],
        volumes=["data:/data"],
        logging=STANDARD_LOG_OPTIONS,
        environment={"HTTP_PROXY": "proxy"},
    )
    result = service.to_dict()
    assert result["container_name"] == "stack_core_0"
    assert result["depends_on"] == {"db": {"condition": "service_started"}}
    assert result["ports"] == ["5000:5000"]
    assert result["volumes"] == ["data:/data"]
    assert result["logging"] is STANDARD_LOG_OPTIONS
    assert result["environment"] == {"HTTP_PROXY": "proxy"}
    assert set(result) == {
        "image",
        "container_name",
        "command",
        "depends_on",
        "ports",
        "volumes",
        "logging",
        "environment",
    }


def test_stack_defaults_are_independent():
    first = Stack(name="a")
    second = Stack(name="b")
    first.members.append(Organization(id="org0"))
    assert second.members == []
    assert len(first.members) == 1


def test_service_definition_holds_volumes():
    definition = ServiceDefinition(service_name="svc", service=Service(image="x"), volume_names=["v1"])
    assert definition.volume_names == ["v1"]
    assert definition.service.to_dict() == {"image": "x"}


def test_connector_is_abstract():
    with pytest.raises(TypeError):
        Connector()


def test_connector_config_is_abstract():
    with pytest.raises(TypeError):
        ConnectorConfig()