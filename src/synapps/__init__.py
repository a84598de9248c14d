"""SYNAPPS

A portable file-system handle, a two-level (in-process + pluggable) cache,
and a handful of small string, SQL, regex, UUID and command-line helpers.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
