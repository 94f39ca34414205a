"""Genesis file for a Clique-consensus Besu network."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_ZERO_HASH = "0x0000000000000000000000000000000000000000000000000000000000000000"
_DEFAULT_BALANCE = "0x200000000000000000000000000000000000000000000000000000000000000"
_EXTRA_DATA_WIDTH = 236


@dataclass
class CliqueConfig:
    epoch_length: int = 30000
    block_period_seconds: int = 5

    def to_dict(self) -> dict[str, Any]:
        return {
            "epochlength": self.epoch_length,
            "blockperiodseconds": self.block_period_seconds,
        }


@dataclass
class GenesisConfig:
    chain_id: int
    constantinople_fix_block: int = 0
    clique: CliqueConfig | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "constantinoplefixblock": self.constantinople_fix_block,
            "clique": self.clique.to_dict() if self.clique else None,
        }


@dataclass
class Alloc:
    balance: str
    code: str = ""
    storage: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"balance": self.balance}
        if self.code:
            result["code"] = self.code
        if self.storage:
            result["storage"] = dict(self.storage)
        return result


@dataclass
class Genesis:
    config: GenesisConfig | None
    extra_data: str
    alloc: dict[str, Alloc] = field(default_factory=dict)
    nonce: str = "0x0"
    timestamp: str = "0x5c51a607"
    gas_limit: str = "0xffffffff"
    difficulty: str = "0x1"
    mix_hash: str = _ZERO_HASH
    coinbase: str = "0x0000000000000000000000000000000000000000"
    number: str = "0x0"
    gas_used: str = "0x0"
    parent_hash: str = _ZERO_HASH

    def to_dict(self) -> dict[str, Any]:
        """Return the genesis document with its JSON key names."""
        return {
            "config": self.config.to_dict() if self.config else None,
            "nonce": self.nonce,
            "timestamp": self.timestamp,
            "extraData": self.extra_data,
            "gasLimit": self.gas_limit,
            "difficulty": self.difficulty,
            "mixHash": self.mix_hash,
            "coinbase": self.coinbase,
            "alloc": {address: self.alloc[address].to_dict() for address in sorted(self.alloc)},
            "number": self.number,
            "gasUsed": self.gas_used,
            "parentHash": self.parent_hash,
        }

    def write_json(self, filename) -> None:
        """Write the genesis document to a file."""
        Path(filename).write_text(json.dumps(self.to_dict(), indent=1))


def create_genesis(addresses, block_period, chain_id) -> Genesis:
    """Build a genesis whose signers and funded accounts are the given addresses.

    A block period of -1 selects the default of 5 seconds.
    """
    if block_period == -1:
        block_period = 5
    addresses = list(addresses)
    alloc = {address: Alloc(balance=_DEFAULT_BALANCE) for address in addresses}
    extra_data = (_ZERO_HASH + "".join(addresses)).ljust(_EXTRA_DATA_WIDTH).replace(" ", "0")
    return Genesis(
        config=GenesisConfig(
            chain_id=chain_id,
            constantinople_fix_block=0,
            clique=CliqueConfig(epoch_length=30000, block_period_seconds=block_period),
        ),
        extra_data=extra_data,
        alloc=alloc,
    )