"""Command line interface for higress-sdk."""
