# spacetools

A small toolkit for working with spacecraft subsystems from the ground:

- **NaCl cryptography** in pure Python: Salsa20/XSalsa20 streams
  (`spacetools.salsa20`), Poly1305 (`spacetools.poly1305`), SHA-512
  (`spacetools.sha512`), Curve25519 (`spacetools.curve25519`),
  `secretbox`, `box` and Ed25519 signatures, plus constant-time
  comparison (`spacetools.verify`).
- **Firmware image search** (`spacetools.firmware`, `spacetools.walkdir`):
  walk a directory tree and pick out `.bin` images whose entry point lands
  inside a flash slot.
- **stdbuf logging** (`spacetools.stdbuf`): turn raw standard-output buffer
  bytes from a remote node into readable log text, with date-stamped log
  file naming and ring-buffer position arithmetic.
- **VTS streaming** (`spacetools.vts`): send attitude quaternions and orbit
  positions to a VTS visualisation server over TCP.
- **VictoriaMetrics push** (`spacetools.victoria_metrics`): buffer parameter
  samples as Prometheus text and push them to a VictoriaMetrics server in
  a background thread.
- **Time fetching** (`spacetools.tfetch`): synchronise the local clock from
  a primary or secondary node.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Cryptography

```python
from spacetools.box import box_keypair, box, box_open
from spacetools.secretbox import secretbox, secretbox_open
from spacetools.ed25519 import sign_keypair, sign, sign_open
from spacetools.sha512 import hash_sha512
from spacetools.errors import CryptoError

digest = hash_sha512(b"abc")

nonce = bytes(24)
sealed = secretbox(b"hello", nonce, bytes(32))
assert secretbox_open(sealed, nonce, bytes(32)) == b"hello"

alice = box_keypair()   # (public, secret)
bob = box_keypair()
sealed = box(b"hi bob", nonce, bob[0], alice[1])
assert box_open(sealed, nonce, alice[0], bob[1]) == b"hi bob"

signer = sign_keypair(bytes(32))   # seed; omit it for a random one
signed = sign(b"telecommand", signer[1])
assert sign_open(signed, signer[0]) == b"telecommand"
```

`secretbox` returns the 16-byte Poly1305 tag followed by the ciphertext.
`sign` returns the 64-byte signature followed by the message, and the
64-byte Ed25519 secret is the seed followed by the public key.
Failed authentication or verification raises `CryptoError`; inputs of the
wrong length raise `ValueError`.

## Finding firmware images

```python
from spacetools.firmware import BinarySearch, vmem_name, boot_slots_to_clear, first_difference

print(vmem_name(1))               # "fl1"
print(boot_slots_to_clear(2))     # (0, 1, 2, 3)

search = BinarySearch(addr_min=0x00000000, addr_max=0x00040000, max_entries=10)
for path in search.search(".", 10):
    print(path)

print(first_difference(b"abc", b"abd"))  # 2
```

An image is accepted when its name ends in `.bin`, it fits between
`addr_min` and `addr_max`, and a little-endian 32-bit word at offset 0x4 or
0x2C4 lies in that window. `spacetools.walkdir.walkdir` skips hidden entries
(names starting with a dot) and only follows regular files and directories.

## stdbuf logs

```python
from spacetools.stdbuf import StdbufLog, format_log_text, next_read_range, advance_out

print(format_log_text(b"boot ok\r\n\x07"))   # "boot ok\n0x07"

with StdbufLog() as log:
    log.open("?obc", "20240101")   # picks obc_20240101_001.log, _002, ...
    log.write(b"hello\n")

print(next_read_range(in_pos=50, out_pos=10, size=1024))  # (10, 40)
print(advance_out(1000, 40, 1024))                         # 16
```

## Streaming to VTS

```python
from spacetools.vts import VtsClient

client = VtsClient.connect("127.0.0.1", 8888, adcs_node=4)
if client.check(4, 305):
    client.add([0.0, 0.0, 0.0, 1.0], 305, 4, 1700000000000)
client.close()
```

`connect` accepts an IPv4 address only and raises `ValueError` otherwise.
Parameter 305 (quaternion, 4 values) and 357 (position in metres, 3 values)
are sent; every `add` also sends a `TIME` line.

## Pushing to VictoriaMetrics

```python
from spacetools.victoria_metrics import (
    MetricBuffer, VictoriaMetricsPusher, format_param_lines,
)

buffer = MetricBuffer(10 * 1024 * 1024)
for line in format_param_lines("temp", 3, [21.5], 1700000000000):
    buffer.add(line)

password = "password"
pusher = VictoriaMetricsPusher(
    server="localhost",
    hostname="ground",
    port=8427,
    use_ssl=False,
    username="user",
    password=password,
    skip_verify=False,
    verbose=False,
    buffer=buffer,
)
if pusher.start():   # tests the connection first
    ...
    pusher.stop()
```

Without a port, 8428 is used, or 8427 when a username is given.

## Time synchronisation

`TimeFetcher` takes two callables: one that asks a node for its time and
returns `(seconds, nanoseconds)` or `None`, and one that applies a time to
the local clock and returns whether it succeeded. Call `onehz()` once a
second; it tries the primary node, then the secondary, until one of them
has delivered a valid timestamp (on or after 1 January 2020). Failures are
counted in `errors`.

## What the package does not do

There is no interactive shell or command-line program, and no spacecraft
network transport. Pinging nodes, listing remote memory areas, uploading
and downloading firmware, reading a remote stdout buffer and querying a
node's clock all need a link to the subsystem that this package does not
provide; the helpers here cover the local side of those jobs, and
`TimeFetcher` takes the link as callables you supply.