"""
A pipeline resource that tracks and deploys helm releases in a namespace.

The `resource` module implements the check, in and out verbs on top of
`connection`, `inventory`, `digest` and `release`.
"""

__all__ = [
    "connection",
    "inventory",
    "digest",
    "release",
    "resource",
    "manifest",
    "exceptions",
    "config",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
