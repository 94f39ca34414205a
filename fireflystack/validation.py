"""Validation of stack creation options and generation of member names."""

from __future__ import annotations

import re
import secrets
from collections.abc import Sequence

_FF_NAME = re.compile(r"[0-9a-zA-Z]([0-9a-zA-Z._-]{0,62}[0-9a-zA-Z])?")
_STACK_NAME_INVALID = re.compile(r"[^-_a-z0-9]")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class ValidationError(ValueError):
    """An option given for a new stack is not acceptable."""


def validate_ff_name(name: str) -> str:
    """Check an org or node name and return it unchanged.

    A name is 1-64 characters of alphanumerics, dot, dash and underscore,
    starting and ending with an alphanumeric.
    """
    if _FF_NAME.fullmatch(name) is None:
        raise ValidationError(
            "name must be 1-64 characters, including alphanumerics (a-zA-Z0-9), "
            "dot (.), dash (-) and underscore (_), and must start/end in an alphanumeric"
        )
    return name


def validate_stack_name_format(stack_name: str) -> str:
    """Check the characters of a stack name and return it unchanged."""
    if not stack_name.strip():
        raise ValidationError("stack name must not be empty")
    if _STACK_NAME_INVALID.search(stack_name):
        raise ValidationError(
            "stack name may not contain any character matching the regex: "
            f"{_STACK_NAME_INVALID.pattern}"
        )
    return stack_name


def validate_count(value: str, external_processes: int = 0) -> int:
    """Parse a member count and return it.

    The count must be a positive integer greater than the number of
    externally managed FireFly core processes.
    """
    if _INTEGER.fullmatch(value) is None:
        raise ValidationError("invalid number")
    count = int(value)
    if count <= 0:
        raise ValidationError("number of members must be greater than zero")
    if external_processes >= count:
        raise ValidationError(
            "number of external processes should not be equal to or greater than the "
            "number of members in the network - at least one FireFly core container "
            "must exist to be able to extract and deploy smart contracts"
        )
    return count


def random_hex_string(length: int) -> str:
    """Return ``length`` random bytes encoded as lower-case hex."""
    return secrets.token_hex(length)


def _pick(names: Sequence[str], index: int, default: str) -> str:
    if index < len(names) and names[index]:
        return names[index]
    return default


def generate_member_names(
    member_count: int,
    org_names: Sequence[str] = (),
    node_names: Sequence[str] = (),
) -> tuple[list[str], list[str]]:
    """Return org and node names for each member.

    A name given for a member is kept; a missing or empty one becomes
    ``org_<hex>`` or ``node_<hex>``, with the same random suffix for the
    org and node of one member.
    """
    orgs: list[str] = []
    nodes: list[str] = []
    for index in range(member_count):
        suffix = random_hex_string(3)
        orgs.append(_pick(org_names, index, f"org_{suffix}"))
        nodes.append(_pick(node_names, index, f"node_{suffix}"))
    return orgs, nodes


def validate_fabric_flags(
    ccp_paths: Sequence[str] = (),
    msp_paths: Sequence[str] = (),
    channel_name: str = "",
    chaincode_name: str = "",
) -> int | None:
    """Check the options for an external Fabric network.

    Returns the member count implied by the connection profiles, or ``None``
    when no external network is configured.
    """
    if not ccp_paths and not msp_paths:
        return None
    if len(ccp_paths) != len(msp_paths):
        raise ValidationError("you must provide ccp and msp flags for each organization")
    if not channel_name or not chaincode_name:
        raise ValidationError(
            "channel and chaincode flags must be set when using an external fabric network"
        )
    return len(ccp_paths)


def validate_tezos_flags(remote_node_url: str) -> str:
    """Check that a remote node URL is given for Tezos and return it."""
    if not remote_node_url:
        raise ValidationError(
            "you must provide 'remote-node-url' flag as local node mode is not supported"
        )
    return remote_node_url