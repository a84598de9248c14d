"""Test suite for SYNAPPS."""
