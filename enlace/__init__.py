"""TCP nodes exchanging length-prefixed messages and packets, with config
loading, logging, a process control block and a small dictionary."""

__version__ = "0.1.0"