# fireflystack

Building blocks for local FireFly development stacks:

- `fireflystack.genesis` – Clique genesis documents for a Besu network.
- `fireflystack.wallet` – secp256k1 key pairs and version 3 (scrypt, AES-128-CTR) keystore wallet files.
- `fireflystack.connector` – the stack model (`Stack`, `Organization`, `ManifestEntry`), compose
  services (`Service`, `ServiceDefinition`) and the `Connector` / `ConnectorConfig` interfaces.
- `fireflystack.ethconnect` and `fireflystack.evmconnect` – configuration files and Docker Compose
  service definitions for the two Ethereum connectors, plus `merge_config` for layering an
  extra YAML file over a generated one.
- `fireflystack.validation` – checks for stack names, org/node names, member counts and
  Fabric/Tezos options, and generation of default member names.
- `fireflystack.cli` – the `fireflystack` command, version reporting and interactive
  prompts (`prompt`, `confirm`, `select_menu`).

## Installation

```
pip install fireflystack
```

## Command line

The command has a single subcommand, `version`:

```
fireflystack version
fireflystack version --short
fireflystack version --output yaml
```

`--output` accepts `json` (the default) or `yaml`; any other value is reported as an
error and the command exits with status 1. Run `fireflystack --help` for the global
options (`--ansi`, `--verbose`).

## Library use

Create a genesis file for a set of signer addresses:

```python
from fireflystack.genesis import create_genesis

genesis = create_genesis(["<signer address>"], block_period=-1, chain_id=2021)
genesis.write_json("genesis.json")
```

A block period of `-1` selects the default of five seconds. Every address is funded in
`alloc` and added to the Clique `extraData` signer list.

Create an encrypted wallet file and read it back:

```python
import json
from fireflystack.wallet import create_wallet_file, decrypt_keystore

password = "password"
key_pair, path = create_wallet_file("keystore", "org_0", password)
with open(path) as fh:
    restored = decrypt_keystore(password, json.load(fh))
assert restored.address == key_pair.address
```

The file is named after the address, preceded by `<prefix>_` when a prefix is given.
`decrypt_keystore` also accepts the JSON text, reads both scrypt and pbkdf2 keystores,
and raises `ValueError` on a wrong password or a malformed document.

Generate connector configuration and compose services for a stack:

```python
from fireflystack.connector import ManifestEntry, Organization, Stack
from fireflystack.evmconnect import Evmconnect

stack = Stack(
    name="dev",
    members=[Organization(id="0", exposed_connector_port=5102)],
    version_manifest={"evmconnect": ManifestEntry(image="evmconnect", tag="latest")},
    runtime_dir="/tmp/dev/runtime",
)
connector = Evmconnect()
config = connector.generate_config(stack, stack.members[0], "geth")
config.write_config("evmconnect_0.yaml", "")
services = connector.get_service_definitions(stack, {"geth": "service_healthy"})
print(services[0].service.to_dict())
```

`Ethconnect` works the same way and reads its image from `version_manifest["ethconnect"]`.
Passing a path as the second argument of `write_config` merges that YAML file over the
generated configuration; a missing file raises `FileNotFoundError`.

Validate names and counts before creating a stack:

```python
from fireflystack.validation import ValidationError, validate_ff_name, validate_count

validate_ff_name("org_0")
try:
    validate_count("0", external_processes=0)
except ValidationError as exc:
    print(exc)
```

## What this package does not do

It does not create, start, stop, reset or remove stacks, and it does not run Docker or
Docker Compose. The command line only reports its version. There is no client for
deploying contracts or creating accounts through a running connector, and
`validate_stack_name_format` checks only the characters of a name, not whether a stack
of that name already exists. Fabric and Tezos support is limited to validating their
options.

## Running the tests

```
pip install -e ".[test]"
pytest
```