"""Integrations with external systems (Kubernetes API, gateway controller)."""
