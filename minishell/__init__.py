"""An interactive command shell with pipes, redirections, variables, wildcards and history."""

__version__ = "0.1.0"