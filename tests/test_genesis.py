import json

from fireflystack.genesis import Alloc, create_genesis

ZERO_HASH = "0x0000000000000000000000000000000000000000000000000000000000000000"
BALANCE = "0x200000000000000000000000000000000000000000000000000000000000000"
ADDRESS_A = "a" * 40
ADDRESS_B = "b" * 40


def test_default_block_period():
    genesis = create_genesis([ADDRESS_A], -1, 2021)
    assert genesis.config.clique.block_period_seconds == 5
    assert genesis.config.clique.epoch_length == 30000


def test_explicit_block_period_and_chain_id():
    genesis = create_genesis([ADDRESS_A], 12, 1337)
    assert genesis.config.clique.block_period_seconds == 12
    assert genesis.config.chain_id == 1337
    assert genesis.config.constantinople_fix_block == 0


def test_extra_data_padding():
    genesis = create_genesis([ADDRESS_A, ADDRESS_B], -1, 2021)
    extra = genesis.extra_data
    assert len(extra) == 236
    assert extra.startswith(ZERO_HASH + ADDRESS_A + ADDRESS_B)
    tail = extra[len(ZERO_HASH) + 80 :]
    assert set(tail) == {"0"}


def test_extra_data_is_not_truncated():
    addresses = [str(i) * 40 for i in range(1, 6)]
    genesis = create_genesis(addresses, -1, 2021)
    assert genesis.extra_data == ZERO_HASH + "".join(addresses)


def test_alloc_funds_every_address():
    genesis = create_genesis([ADDRESS_A, ADDRESS_B], -1, 2021)
    assert set(genesis.alloc) == {ADDRESS_A, ADDRESS_B}
    for alloc in genesis.alloc.values():
        assert alloc.balance == BALANCE
        assert alloc.to_dict() == {"balance": BALANCE}


def test_to_dict_key_names_and_constants():
    document = create_genesis([ADDRESS_A], 3, 2021).to_dict()
    assert document["config"] == {
        "chainId": 2021,
        "constantinoplefixblock": 0,
        "clique": {"epochlength": 30000, "blockperiodseconds": 3},
    }
    assert document["coinbase"] == "0x0000000000000000000000000000000000000000"
    assert document["difficulty"] == "0x1"
    assert document["gasLimit"] == "0xffffffff"
    assert document["timestamp"] == "0x5c51a607"
    assert document["mixHash"] == ZERO_HASH
    assert document["parentHash"] == ZERO_HASH


def test_alloc_optional_fields():
    alloc = Alloc(balance="0x1", code="0x60", storage={"0x00": "0x01"})
    assert alloc.to_dict() == {"balance": "0x1", "code": "0x60", "storage": {"0x00": "0x01"}}


def test_write_json_round_trip(tmp_path):
    genesis = create_genesis([ADDRESS_B, ADDRESS_A], -1, 2021)
    target = tmp_path / "genesis.json"
    genesis.write_json(target)
    loaded = json.loads(target.read_text())
    assert loaded == genesis.to_dict()
    assert list(loaded["alloc"]) == [ADDRESS_A, ADDRESS_B]