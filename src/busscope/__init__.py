"""busscope: explore services and objects on a D-Bus message bus."""

__version__ = "0.3.0"
