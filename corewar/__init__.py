"""A Core War virtual machine with a console runner and a pygame visual mode."""

__version__ = "0.1.0"