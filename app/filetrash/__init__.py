"""filetrash - deferred deletion of filesystem entries.

Paths that cannot be removed right away are kept in an in-memory trash
and retried until they are deleted or expire.
"""

__version__ = "0.1.0"
