"""Kubernetes resource-access layer for the Higress gateway control plane."""

__version__ = "0.1.0"
