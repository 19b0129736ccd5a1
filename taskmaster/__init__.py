"""TaskMaster Pro backend: task CRUD over HTTP."""

__version__ = "1.0.0"
