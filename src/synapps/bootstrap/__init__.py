"""Bootstrap (composition root) for SYNAPPS.

Assembles runtime objects from configuration: the host descriptor, file
handles bound to it, and the two-level cache (memory first level chained to a
local-file second level).

Import rules:
- Entry points import *this* package rather than wiring adapters themselves.
- Inner layers must not import `synapps.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_cache, build_file, build_host

__all__ = ["AppContainer", "bootstrap", "build_cache", "build_file", "build_host"]
