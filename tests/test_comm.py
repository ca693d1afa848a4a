from dataclasses import dataclass

import pytest

from ekatcomm.comm import (
    Comm,
    CommError,
    MpiComm,
    MpiDatatype,
    MpiOp,
    get_mpi_type,
)


@dataclass(frozen=True)
class TwoInts:
    i: int
    j: int

    @classmethod
    def of(cls, val):
        return cls(val, -val)


@pytest.fixture
def comm():
    return Comm(MpiComm.WORLD)


def test_root(comm):
    assert comm.root_rank == 0
    assert comm.am_i_root == (comm.root_rank == comm.rank)


def test_default_wraps_self():
    c = Comm()
    assert c.mpi_comm is MpiComm.SELF
    assert c.size == 1
    assert c.rank == 0


def test_null_comm_raises():
    with pytest.raises(CommError):
        Comm(MpiComm.NULL)


def test_reset_to_null_raises(comm):
    with pytest.raises(CommError):
        comm.reset_mpi_comm(MpiComm.NULL)
    assert comm.mpi_comm is MpiComm.WORLD


def test_reset_changes_handle(comm):
    comm.reset_mpi_comm(MpiComm.SELF)
    assert comm.mpi_comm is MpiComm.SELF
    assert (comm.rank, comm.size) == (0, 1)


@pytest.mark.parametrize("conv", [int, float, bool, str])
def test_broadcast(comm, conv):
    vals = [None] * comm.size
    vals[comm.rank] = conv(-comm.rank)
    for i in range(comm.size):
        out = comm.broadcast([vals[i]], i)
        assert out == [conv(-i)]


def test_broadcast_bad_root(comm):
    with pytest.raises(CommError):
        comm.broadcast([1], comm.size)


@pytest.mark.parametrize("conv", [int, float])
def test_scan(comm, conv):
    rank = comm.rank
    result = comm.scan([conv(rank)], MpiOp.SUM)
    assert result == [conv(rank * (rank + 1)) / 2]


def test_scan_null_op(comm):
    with pytest.raises(CommError):
        comm.scan([1], MpiOp.OP_NULL)


@pytest.mark.parametrize("conv", [int, float])
def test_reduce_sum(comm, conv):
    size = comm.size
    sum_gauss = (size - 1) * size // 2
    assert comm.all_reduce([conv(comm.rank)], MpiOp.SUM) == [conv(sum_gauss)]


def test_reduce_logical(comm):
    assert comm.all_reduce([comm.am_i_root], MpiOp.LAND) == [comm.size == 1]
    assert comm.all_reduce([comm.am_i_root], MpiOp.LOR) == [True]


def test_reduce_rejects_non_op(comm):
    with pytest.raises(TypeError):
        comm.all_reduce([1], "sum")


@pytest.mark.parametrize("conv", [int, float, bool, TwoInts.of])
def test_gather(comm, conv):
    ranks = comm.all_gather([conv(comm.rank)])
    assert ranks == [conv(i) for i in range(comm.size)]


def test_split(comm):
    rank = comm.rank
    size = comm.size
    new_comm = comm.split(rank % 2)
    am_even = rank % 2 == 0
    num_odd = size // 2
    num_even = size % 2 + num_odd
    assert new_comm.size == (num_even if am_even else num_odd)
    ranks = new_comm.all_gather([rank])
    assert len(ranks) == new_comm.size
    for i, r in enumerate(ranks):
        assert r == (2 * i if am_even else 2 * i + 1)


def test_barrier_leaves_state(comm):
    comm.barrier()
    assert (comm.rank, comm.size, comm.mpi_comm) == (0, 1, MpiComm.WORLD)


@pytest.mark.parametrize(
    "key, expected",
    [
        (int, MpiDatatype.INT),
        (float, MpiDatatype.DOUBLE),
        (bool, MpiDatatype.CXX_BOOL),
        (str, MpiDatatype.CHAR),
        ("char", MpiDatatype.CHAR),
        ("short", MpiDatatype.SHORT),
        ("long", MpiDatatype.LONG),
        ("long long", MpiDatatype.LONG_LONG),
        ("float", MpiDatatype.FLOAT),
        ("double", MpiDatatype.DOUBLE),
    ],
)
def test_get_mpi_type(key, expected):
    assert get_mpi_type(key) is expected


@pytest.mark.parametrize("key", [list, "unsigned", 3])
def test_get_mpi_type_unknown(key):
    with pytest.raises(TypeError):
        get_mpi_type(key)