"""Integration tests.

The `File` handle, Zip extraction, the local-file cache and `Runtime`
against the real file system and shell, inside ``tmp_path``.
"""
