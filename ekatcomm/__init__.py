"""A single-process communicator with rank, size and collective operations, in ekatcomm.comm."""

__version__ = "0.1.0"