"""Adapters (infrastructure) for SYNAPPS.

Concrete implementations sitting on top of platform primitives: the portable
file handle and its helpers, the memory and local-file caches, and the output
buffer stack.

Dependency rule: may import `synapps.domain` and `synapps.interfaces`; the
domain must not import this package.
"""
