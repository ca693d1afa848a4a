"""A small communicator wrapper that tracks its rank and size.

Communicators here are single-process: every communicator holds exactly
one member, whose rank is 0. Collective operations behave as they would
on a communicator of size one.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar, Union

T = TypeVar("T")

__all__ = [
    "CommError",
    "MpiComm",
    "MpiDatatype",
    "MpiOp",
    "Comm",
    "get_mpi_type",
]


class CommError(Exception):
    """Raised when a communicator is misused."""


class MpiComm(enum.Enum):
    """Handles of the predefined communicators."""

    NULL = "null"
    WORLD = "world"
    SELF = "self"


class MpiDatatype(enum.Enum):
    """Element types a communicator can transfer."""

    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    LONG_LONG = "long long"
    FLOAT = "float"
    DOUBLE = "double"
    CXX_BOOL = "bool"


class MpiOp(enum.Enum):
    """Reduction operations."""

    OP_NULL = "op_null"
    MAX = "max"
    MIN = "min"
    SUM = "sum"
    PROD = "prod"
    LAND = "land"
    BAND = "band"
    LOR = "lor"
    BOR = "bor"
    LXOR = "lxor"
    BXOR = "bxor"
    MINLOC = "minloc"
    MAXLOC = "maxloc"
    REPLACE = "replace"


_PY_TYPES: dict[type, MpiDatatype] = {
    bool: MpiDatatype.CXX_BOOL,
    int: MpiDatatype.INT,
    float: MpiDatatype.DOUBLE,
    str: MpiDatatype.CHAR,
    bytes: MpiDatatype.CHAR,
}

_TYPE_NAMES: dict[str, MpiDatatype] = {dt.value: dt for dt in MpiDatatype}


def get_mpi_type(py_type: Union[type, str]) -> MpiDatatype:
    """Return the datatype matching a Python type or a C type name.

    Accepted names are "char", "short", "int", "long", "long long",
    "float", "double" and "bool".
    """
    if isinstance(py_type, str):
        try:
            return _TYPE_NAMES[py_type.strip()]
        except KeyError:
            raise TypeError(f"no datatype for type name {py_type!r}") from None
    if isinstance(py_type, type):
        try:
            return _PY_TYPES[py_type]
        except KeyError:
            raise TypeError(f"no datatype for type {py_type.__name__}") from None
    raise TypeError(f"expected a type or a type name, got {py_type!r}")


class Comm:
    """A communicator together with its rank and size.

    The default communicator wraps ``MpiComm.SELF`` rather than
    ``MpiComm.WORLD``: it is safer to assume this process is alone in its
    group than to assume the whole world is.
    """

    __slots__ = ("_mpi_comm", "_size", "_rank")

    def __init__(self, mpi_comm: MpiComm = MpiComm.SELF) -> None:
        self._mpi_comm = MpiComm.SELF
        self._size = 1
        self._rank = 0
        self.reset_mpi_comm(mpi_comm)

    def reset_mpi_comm(self, new_mpi_comm: MpiComm) -> None:
        """Wrap a different communicator, updating rank and size."""
        if not isinstance(new_mpi_comm, MpiComm):
            raise TypeError(f"expected an MpiComm, got {new_mpi_comm!r}")
        if new_mpi_comm is MpiComm.NULL:
            raise CommError("Error! ekat::Comm requires non-null MPI comm.")
        self._mpi_comm = new_mpi_comm
        self._size = 1
        self._rank = 0

    @property
    def root_rank(self) -> int:
        """Rank of the root process."""
        return 0

    @property
    def am_i_root(self) -> bool:
        """Whether this process is the root."""
        return self._rank == self.root_rank

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def size(self) -> int:
        return self._size

    @property
    def mpi_comm(self) -> MpiComm:
        return self._mpi_comm

    def __repr__(self) -> str:
        return f"Comm({self._mpi_comm.name}, rank={self._rank}, size={self._size})"

    def _check_usable(self) -> None:
        if not isinstance(self._mpi_comm, MpiComm) or self._mpi_comm is MpiComm.NULL:
            raise CommError("Error! ekat::Comm requires non-null MPI comm.")
        if not 0 <= self._rank < self._size:
            raise CommError(
                f"inconsistent communicator: rank {self._rank}, size {self._size}"
            )

    def _check_root(self, root: int) -> None:
        if not 0 <= root < self._size:
            raise CommError(
                f"invalid root rank {root} for a communicator of size {self._size}"
            )

    @staticmethod
    def _check_op(op: MpiOp) -> None:
        if not isinstance(op, MpiOp):
            raise TypeError(f"expected an MpiOp, got {op!r}")
        if op is MpiOp.OP_NULL:
            raise CommError("cannot reduce with the null operation")

    def broadcast(self, vals: Iterable[T], root: int) -> list[T]:
        """Return the root's values as seen by every process."""
        self._check_root(root)
        return list(vals)

    def scan(self, values: Iterable[T], op: MpiOp) -> list[T]:
        """Inclusive prefix reduction of each entry over ranks 0..rank."""
        self._check_op(op)
        return list(values)

    def all_reduce(self, values: Iterable[T], op: MpiOp) -> list[T]:
        """Reduction of each entry over all ranks, known to every rank."""
        self._check_op(op)
        return list(values)

    def all_gather(self, values: Sequence[Any]) -> list[Any]:
        """Concatenation of every rank's values, in rank order."""
        return list(values) * self._size

    def barrier(self) -> None:
        """Synchronise all members; with a single member only the state is checked."""
        self._check_usable()

    def split(self, color: int) -> "Comm":
        """Split into sub-communicators of processes sharing a colour."""
        if not isinstance(color, int):
            raise TypeError(f"colour must be an integer, got {color!r}")
        return Comm(MpiComm.SELF)