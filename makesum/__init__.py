"""Summary (table of contents) generator for documentation trees.

The command surface is implemented with Typer, and fatal errors are rendered
with Rich, while leveled runner output stays plain ANSI text.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
