"""Internal tooling for repository guard checks.

This package hosts guard scripts that enforce strict standards such as:
- No use of typing.Any or casts, no "type: ignore" comments
- No bare except; handlers must re-raise or log what they catch
- No use of print, and no logging configuration from library modules

The test-suite runs every guard over the repository.
"""
