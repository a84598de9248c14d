"""Process-level helpers: command-line parsing and shell command execution."""
