"""Contract tests.

The `Cache` contract written once and run against every implementation
through a parametrized fixture.
"""
