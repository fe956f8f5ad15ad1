"""A small interactive command shell with builtins, pipes and command sequences."""

__version__ = "0.1.0"