"""Shared fixtures for Kubernetes service tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from higress_sdk.integrations.kubernetes.client import KubernetesClient

NAMESPACE = "higress-system"


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Create a mock Kubernetes client with API sub-mocks.

    The API groups (core_v1, networking_v1, custom_objects) are plain
    MagicMock attributes; error translation uses the real implementation.
    """
    mock_client = MagicMock()
    mock_client.namespace = NAMESPACE
    mock_client.ingress_class_name = "higress"
    mock_client.protected_namespaces = {"kube-system"}
    mock_client.translate_api_exception.side_effect = KubernetesClient.translate_api_exception
    return mock_client

