# ekit

A small toolbox of general-purpose helpers: typed access to dynamic values,
helpers for storing values in database columns, and thread synchronisation
primitives.

## Installation

```
pip install ekit
```

To run the test suite:

```
pip install "ekit[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `ekit.comparator` | `compare_real_number(src, dst)`: returns -1, 0 or 1 |
| `ekit.value` | `AnyValue`: typed access to a value that may carry an error; `InvalidTypeError` |
| `ekit.stringx` | `to_bytes` / `to_string`: UTF-8 conversion between `str` and `bytes` |
| `ekit.nulls` | `Null` and the `new_null_*` constructors: a value is valid only when it is not the zero value |
| `ekit.json_column` | `JsonColumn`: a value stored as a JSON document |
| `ekit.encrypt` | `EncryptColumn`: a value stored encrypted with AES-GCM |
| `ekit.scanner` | `Rows`, `SQLRowsScanner`, `new_sql_rows_scanner`, `NoMoreRowsError`, `InvalidArgumentError`: reads rows from a DB-API cursor |
| `ekit.cond` | `Cond`: a FIFO condition variable whose `wait` accepts a timeout |
| `ekit.syncmap` | `SyncMap`: a thread-safe map distinguishing "missing" from "stored None" |
| `ekit.pool` | `Pool`: a pool of reusable objects created by a factory |
| `ekit.segment_lock` | `SegmentKeysLock`: read/write locks picked by the FNV-1a hash of a key |
| `ekit.atomic` | `AtomicValue`: atomic load, store, swap and compare-and-swap |

## Examples

### Typed values

The plain accessors require the exact type; the `as_*` accessors also parse
decimal strings; the `*_or_default` accessors return the default instead of
raising. Sized integers and `float32` are numpy scalars.

```python
from ekit.value import AnyValue

av = AnyValue(val="42")
av.as_int()            # 42
av.int_or_default(7)   # 7, because the value is a str and not an int
av.int()               # raises InvalidTypeError

AnyValue(err=KeyError("missing")).int()   # raises the stored KeyError
```

### Nullable values

```python
from ekit.nulls import new_null_string

new_null_string("")      # Null(value='', valid=False)
new_null_string("abc")   # Null(value='abc', valid=True)
```

### JSON column

```python
from ekit.json_column import JsonColumn

col = JsonColumn(val={"Name": "Tom"}, valid=True)
raw = col.value()      # b'{"Name":"Tom"}'

back = JsonColumn()
back.scan(raw)
back.val               # {'Name': 'Tom'}
```

`value()` returns `None` when `valid` is false; `scan(None)` leaves the column
untouched. Pass `decoder=` to turn the decoded JSON into your own type.

### Encrypted column

Keys must be 16, 24 or 32 bytes long. `kind` tells `scan` how to decode:
`str` and `bytes` are stored as is, numbers as big-endian fixed-width binary,
anything else (including dataclasses) as JSON.

```python
import os
from ekit.encrypt import EncryptColumn

key = os.urandom(16)
data = EncryptColumn(val="hello", valid=True, key=key).value()

out = EncryptColumn(key=key, kind=str)
out.scan(data)
out.val                # 'hello'
```

### Scanning rows

```python
import sqlite3
from ekit.scanner import new_sql_rows_scanner

conn = sqlite3.connect(":memory:")
cursor = conn.execute("SELECT 1, 'a' UNION ALL SELECT 2, 'b'")
scanner = new_sql_rows_scanner(cursor)
scanner.scan_all()     # [[1, 'a'], [2, 'b']]
scanner.scan()         # raises NoMoreRowsError
```

The scanner is also iterable, and never closes the cursor.

### Condition variable with a timeout

```python
import threading
from ekit.cond import Cond

cond = Cond(threading.Lock())
with cond:
    try:
        cond.wait(timeout=0.1)
    except TimeoutError:
        pass   # nobody called signal() or broadcast() in time
```

### Sharded key locks

```python
from ekit.segment_lock import SegmentKeysLock

locks = SegmentKeysLock(8)
locks.lock("user:1")
try:
    ...
finally:
    locks.unlock("user:1")

if locks.try_rlock("user:2"):
    locks.runlock("user:2")
```

## What it does not do

ekit opens no database connections and ships no database driver: the scanner
works on a cursor you already have, and the column helpers only produce and
consume the raw values you read and write yourself. There is no command-line
interface.