"""reordinator — reorder the lines of a text file."""

__version__ = "0.1.0"
