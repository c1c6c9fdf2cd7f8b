# toolhive

Building blocks for tooling that runs MCP (Model Context Protocol) servers:
AES-256-GCM encryption and an encrypted secret store, parsing of
`"<name>,target=<ENV_VAR>"` secret parameters, a file-based store for named
state under the XDG state directory, JSON-RPC 2.0 message decoding and
encoding, transport error types, version information and a periodic check
for newer releases.

## Modules

- `toolhive.secrets.aes` – `encrypt`, `decrypt` and `ExceedsMaxSizeError`.
- `toolhive.secrets.encrypted` – `EncryptedManager` and
  `new_encrypted_manager`.
- `toolhive.secrets.parameters` – the `Provider` protocol,
  `SecretParameter` and `parse_secret_parameter`.
- `toolhive.state.local` – the `Store` protocol, `LocalStore` and
  `new_store`.
- `toolhive.transport.jsonrpc` – `Request`, `Response`, `decode_message`,
  `encode_message`, `has_binary_data`, `sanitize_json_string` and
  `JSONRPCDecodeError`.
- `toolhive.transport.errors` – `TransportError`, `new_transport_error` and
  the specific errors such as `UnsupportedTransportError` and
  `ContainerIDNotSetError`.
- `toolhive.updates.client` – the `VersionClient` protocol,
  `DefaultVersionClient` and `new_version_client`.
- `toolhive.updates.checker` – `UpdateChecker`, `new_update_checker` and
  `notify_if_update_available`.
- `toolhive.versions` – `VersionInfo` and `get_version_info`.

## Encrypting data

```python
import os

from toolhive.secrets.aes import decrypt, encrypt

key = os.urandom(32)
sealed = encrypt(b"Hello world", key)
assert decrypt(sealed, key) == b"Hello world"
```

The output is `nonce | ciphertext | tag`. Keys must be 16, 24 or 32 bytes
long. Plaintexts larger than 32 MiB raise `ExceedsMaxSizeError`; a short
input raises `ValueError("malformed ciphertext")`, and a tampered message or
a wrong key raises `ValueError("message authentication failed")`.

## Storing secrets

```python
import os

from toolhive.secrets.encrypted import new_encrypted_manager
from toolhive.secrets.parameters import parse_secret_parameter

key = os.urandom(32)
manager = new_encrypted_manager("secrets.enc", key)
manager.set_secret("github", "token")
print(manager.list_secrets())

param = parse_secret_parameter("github,target=GITHUB_TOKEN")
print(param.name, param.target)
```

`new_encrypted_manager` creates the file if it does not exist. Every change
is written back to the encrypted file, so a new manager opened on the same
file with the same key sees the same secrets. Asking for a missing secret
raises `LookupError`; an empty name raises `ValueError`.

## Storing state

```python
import io

from toolhive.state.local import LocalStore

store = LocalStore("toolhive", state_home="/tmp/state")
store.save("fetch", io.BytesIO(b'{"name": "fetch"}'))
print(store.list())          # ['fetch']
print(store.exists("fetch")) # True
with store.get_reader("fetch") as reader:
    print(reader.read())
store.delete("fetch")
```

Each name is kept as `<name>.json` in `<state home>/<app>/runconfigs`. The
state home defaults to `$XDG_STATE_HOME`, or `~/.local/state` when that is
unset; `new_store(app_name)` uses the default. Loading, reading or deleting
a missing name raises `FileNotFoundError`.

## JSON-RPC messages

```python
from toolhive.transport.jsonrpc import Request, decode_message, encode_message

msg = decode_message(b'{"jsonrpc":"2.0","id":1,"method":"ping"}')
assert isinstance(msg, Request) and msg.is_call
print(encode_message(msg))  # b'{"jsonrpc":"2.0","id":1,"method":"ping"}'
```

A message with a method is a `Request`; one without is a `Response`, which
must have an id. Anything else raises `JSONRPCDecodeError`.
`has_binary_data` spots lines with control characters, and
`sanitize_json_string` cuts such a line down to the span from the first `{`
to the last `}` with the control characters removed.

## Checking for updates

```python
from toolhive.updates.checker import new_update_checker
from toolhive.updates.client import new_version_client

checker = new_update_checker(new_version_client())
checker.check_latest_version()
```

The checker keeps an instance id and the last answer in
`$XDG_DATA_HOME/toolhive/updates.json` (default `~/.local/share`). It asks
the update service at most once every four hours and prints a notice when a
newer version is available. Setting `TOOLHIVE_DEV` adds ` dev` to the
`User-Agent` sent to the service.

## Version information

```python
from toolhive.versions import get_version_info

print(get_version_info().to_dict())
```

## What this package does not do

It does not start or manage containers, has no run configuration type, no
stdio or SSE transports, no HTTP or SSE proxy servers, and no command-line
program. It provides the pieces listed above for use from your own code.