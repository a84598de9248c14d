"""Interfaces (contracts) for SYNAPPS.

Abstract base classes implemented by adapters: the two-level `Cache`
contract and the stack-scoped `OutputBuffer` contract.

Dependency rule: may import `synapps.domain` only.
"""
