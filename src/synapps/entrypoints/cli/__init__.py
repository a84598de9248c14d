"""The ``synapps`` command-line tool."""
