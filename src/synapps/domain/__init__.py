"""Domain layer for SYNAPPS.

Holds the technology-agnostic values every other layer shares: the error
taxonomy and the host operating-system descriptor.

Dependency rule: do not import from `synapps.adapters` or `synapps.entrypoints`.
"""
