"""Starter .patchwise.toml template."""

DEFAULT_TOML = """\
# patchwise configuration
version = "1.0"

[apply]
strict_context = false    # true = abort when a context line differs from the file
trim_whitespace = true    # compare lines with leading/trailing whitespace stripped

[output]
format = "terminal"       # terminal | json
show_summary = true
show_edits = true

[logging]
level = "WARNING"         # DEBUG | INFO | WARNING | ERROR
"""
