"""Entrypoints (inbound adapters) for SYNAPPS.

Expose the library to the outside world through the ``synapps`` command-line
tool. Parse and validate inputs, call into `synapps.bootstrap`, and present
results.
"""
