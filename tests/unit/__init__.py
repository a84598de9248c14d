"""Unit tests.

Single modules checked in isolation: helpers, errors, host descriptors, the
memory cache against a recording fake, output buffers, path encoding with
injected hosts. No file-system or process I/O beyond pytest's own fixtures.
"""
