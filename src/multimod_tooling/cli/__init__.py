"""Command line interface: multimod <command>."""
