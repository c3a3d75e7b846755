"""Personal task tracker: add, list, complete, edit and remove tasks from the shell."""

__version__ = "0.1.0"
