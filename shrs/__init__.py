"""A framework for building and configuring your own interactive shell."""

__version__ = "0.0.2"