"""Database import extension: run a SQL query and materialize the result as a project."""

__version__ = "0.1.0"
