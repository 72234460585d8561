"""One-way folder mirroring with an append-only audit log."""

__version__ = "0.1.0"
