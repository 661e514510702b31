"""metro-lines: Offset multi-route transit lines from shared topologies."""

__version__ = "0.3.0"
