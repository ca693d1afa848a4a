# ekatcomm

A small communicator object that carries its rank and size and offers
the usual collective operations: broadcast, scan, all-reduce,
all-gather, barrier and split.

Every communicator holds exactly one member, whose rank is 0 and who is
also the root. The collectives behave as they would on a communicator
of size one: they hand back your own contribution as a new list.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Usage

Everything lives in the module `ekatcomm.comm`.

```python
from ekatcomm.comm import Comm, MpiComm, MpiOp, get_mpi_type

comm = Comm(MpiComm.WORLD)
comm.rank          # 0
comm.size          # 1
comm.root_rank     # 0
comm.am_i_root     # True
comm.mpi_comm      # MpiComm.WORLD

comm.all_reduce([3, 4], MpiOp.SUM)   # [3, 4]
comm.scan([5], MpiOp.SUM)            # [5]
comm.all_gather([comm.rank])         # [0]
comm.broadcast([7], root=0)          # [7]
comm.barrier()

sub = comm.split(color=comm.rank % 2)
sub.size                             # 1
sub.mpi_comm                         # MpiComm.SELF

get_mpi_type(float)                  # MpiDatatype.DOUBLE
get_mpi_type("long long")            # MpiDatatype.LONG_LONG
```

`Comm()` with no argument wraps `MpiComm.SELF`.
`rank`, `size`, `root_rank`, `am_i_root` and `mpi_comm` are read-only
properties. `reset_mpi_comm` switches a communicator to another handle.

## Errors

- `Comm(MpiComm.NULL)` and `reset_mpi_comm(MpiComm.NULL)` raise
  `CommError`; a value that is not an `MpiComm` raises `TypeError`.
- `scan` and `all_reduce` raise `CommError` for `MpiOp.OP_NULL` and
  `TypeError` for anything that is not an `MpiOp`.
- `broadcast` raises `CommError` when `root` is not a rank of the
  communicator.
- `split` raises `TypeError` when the colour is not an integer.
- `get_mpi_type` raises `TypeError` for a type or name it does not know.
  It accepts `bool`, `int`, `float`, `str` and `bytes`, or one of the
  names `"char"`, `"short"`, `"int"`, `"long"`, `"long long"`,
  `"float"`, `"double"` and `"bool"`.

```python
from ekatcomm.comm import Comm, CommError, MpiComm

try:
    Comm(MpiComm.NULL)
except CommError as err:
    print(err)
```

## Names

- `Comm`: the communicator.
- `MpiComm`: the handles `NULL`, `WORLD` and `SELF`.
- `MpiOp`: reduction operations such as `SUM`, `MAX`, `LAND` and `LOR`.
- `MpiDatatype`: element types, as returned by `get_mpi_type`.
- `CommError`: raised when a communicator is misused.

## What it does not do

There is no communication between processes. No other process is ever
contacted, every communicator has size one whatever handle it wraps, and
the reduction operation passed to `scan` and `all_reduce` is checked but
never applied to anything.