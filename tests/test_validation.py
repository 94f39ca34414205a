import re

import pytest

from fireflystack.validation import (
    ValidationError,
    generate_member_names,
    random_hex_string,
    validate_count,
    validate_fabric_flags,
    validate_ff_name,
    validate_stack_name_format,
    validate_tezos_flags,
)


@pytest.mark.parametrize("name", ["a", "org_1", "node.one-2", "A" * 64])
def test_ff_name_valid(name):
    assert validate_ff_name(name) == name


@pytest.mark.parametrize("name", ["", "-a", "a-", "_x", "a b", "a" * 65, "a\n"])
def test_ff_name_invalid(name):
    with pytest.raises(ValidationError, match="name must be 1-64 characters"):
        validate_ff_name(name)


def test_stack_name_valid():
    assert validate_stack_name_format("my-stack_1") == "my-stack_1"


@pytest.mark.parametrize("name", ["", "   "])
def test_stack_name_empty(name):
    with pytest.raises(ValidationError, match="stack name must not be empty"):
        validate_stack_name_format(name)


@pytest.mark.parametrize("name", ["Stack", "my stack", "a.b"])
def test_stack_name_bad_characters(name):
    with pytest.raises(ValidationError) as info:
        validate_stack_name_format(name)
    assert "[^-_a-z0-9]" in str(info.value)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_tezos_flags("")


def test_count_valid():
    assert validate_count("3") == 3
    assert validate_count("+4", 1) == 4


@pytest.mark.parametrize("value", ["abc", "", " 3", "1.5", "1_0"])
def test_count_not_a_number(value):
    with pytest.raises(ValidationError, match="invalid number"):
        validate_count(value)


@pytest.mark.parametrize("value", ["0", "-1"])
def test_count_not_positive(value):
    with pytest.raises(ValidationError, match="greater than zero"):
        validate_count(value)


@pytest.mark.parametrize("external", [2, 3])
def test_count_external_processes(external):
    with pytest.raises(ValidationError, match="number of external processes"):
        validate_count("2", external)


def test_random_hex_string():
    value = random_hex_string(3)
    assert re.fullmatch(r"[0-9a-f]{6}", value)
    assert random_hex_string(0) == ""


def test_generate_member_names_defaults():
    orgs, nodes = generate_member_names(2)
    assert len(orgs) == 2 and len(nodes) == 2
    for org, node in zip(orgs, nodes):
        org_match = re.fullmatch(r"org_([0-9a-f]{6})", org)
        node_match = re.fullmatch(r"node_([0-9a-f]{6})", node)
        assert org_match and node_match
        assert org_match.group(1) == node_match.group(1)


def test_generate_member_names_keeps_given_names():
    orgs, nodes = generate_member_names(2, ["alpha", ""], ["beta"])
    assert orgs[0] == "alpha"
    assert nodes[0] == "beta"
    assert re.fullmatch(r"org_[0-9a-f]{6}", orgs[1])
    assert re.fullmatch(r"node_[0-9a-f]{6}", nodes[1])


def test_generate_member_names_ignores_extra_names():
    orgs, nodes = generate_member_names(1, ["alpha", "gamma"], ["beta", "delta"])
    assert orgs == ["alpha"]
    assert nodes == ["beta"]


def test_generate_member_names_zero():
    assert generate_member_names(0, ["alpha"], ["beta"]) == ([], [])


def test_fabric_flags_none_given():
    assert validate_fabric_flags([], [], "", "") is None


def test_fabric_flags_mismatch():
    with pytest.raises(ValidationError, match="ccp and msp flags for each organization"):
        validate_fabric_flags(["a.yaml", "b.yaml"], ["msp_a"], "firefly", "ffchain")


@pytest.mark.parametrize("channel, chaincode", [("", "ffchain"), ("firefly", ""), ("", "")])
def test_fabric_flags_missing_channel_or_chaincode(channel, chaincode):
    with pytest.raises(ValidationError, match="channel and chaincode flags must be set"):
        validate_fabric_flags(["a.yaml"], ["msp_a"], channel, chaincode)


def test_fabric_flags_member_count():
    ccp = ["a.yaml", "b.yaml"]
    assert validate_fabric_flags(ccp, ["msp_a", "msp_b"], "firefly", "ffchain") == len(ccp)


def test_tezos_flags():
    url = "http://localhost:8732"
    assert validate_tezos_flags(url) == url
    with pytest.raises(ValidationError, match="remote-node-url"):
        validate_tezos_flags("")