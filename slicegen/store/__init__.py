"""In-memory table store and the module that provides it.

Generated repositories depend on :class:`DatabaseService`; their feature
modules import :data:`DatabaseModule` so that a single shared store instance
is available to every repository in the application.
"""

from slicegen.modules import Module
from slicegen.store.database import DatabaseService, TableRow

DatabaseModule = Module(name="DatabaseModule", providers=[DatabaseService])

__all__ = [
    "DatabaseModule",
    "DatabaseService",
    "TableRow",
]
