"""Support namespace for small, stateless helpers.

Single-purpose modules (``strings``, ``regex``, ``sql``, ``uuid``) with no
dependency on the rest of SYNAPPS. Import helpers from their defining modules;
nothing is re-exported here.
"""
