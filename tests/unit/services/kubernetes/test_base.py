"""Unit tests for the shared resource manager protocol."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException, V1ConfigMap, V1ObjectMeta, V1Status

from higress_sdk.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesInvalidArgumentError,
    KubernetesNotFoundError,
    KubernetesUpstreamError,
)
from higress_sdk.services.kubernetes.base import (
    K8sBaseManager,
    K8sResourceManager,
    is_not_found,
    sort_kubernetes_objects,
)

NAMESPACE = "higress-system"


class FakeManager(K8sResourceManager[V1ConfigMap]):
    """Manager whose raw calls are delegated to a MagicMock backend."""

    _entity_name = "fake"
    _resource_type = "ConfigMap"

    def __init__(self, client: Any, backend: MagicMock) -> None:
        super().__init__(client)
        self.backend = backend

    def _list_objects(self, label_selector: str, field_selector: str | None) -> list[V1ConfigMap]:
        return self.backend.list(label_selector, field_selector)

    def _read_object(self, name: str) -> V1ConfigMap:
        return self.backend.read(name)

    def _create_object(self, obj: V1ConfigMap) -> V1ConfigMap:
        return self.backend.create(obj)

    def _replace_object(self, name: str, obj: V1ConfigMap) -> V1ConfigMap:
        return self.backend.replace(name, obj)

    def _delete_object(self, name: str) -> Any:
        return self.backend.delete(name)

    def _new_metadata(self) -> V1ObjectMeta:
        return V1ObjectMeta()


@pytest.fixture
def backend() -> MagicMock:
    """Raw API backend."""
    return MagicMock()


@pytest.fixture
def manager(mock_k8s_client: MagicMock, backend: MagicMock) -> FakeManager:
    """Fake manager over the mock client."""
    return FakeManager(mock_k8s_client, backend)


def _cm(name: str | None) -> V1ConfigMap:
    return V1ConfigMap(metadata=V1ObjectMeta(name=name))


@pytest.mark.unit
@pytest.mark.kubernetes
class TestSorting:
    """Test name ordering."""

    def test_sorted_ascending(self) -> None:
        """Test objects come back ordered by name."""
        result = sort_kubernetes_objects([_cm("c"), _cm("a"), _cm("b")])
        assert [o.metadata.name for o in result] == ["a", "b", "c"]

    def test_missing_names_sort_first(self) -> None:
        """Test objects without a name or metadata sort before named ones."""
        no_meta = V1ConfigMap(metadata=None)
        result = sort_kubernetes_objects([_cm("b"), no_meta, _cm(None), _cm("a")])
        assert result[0] is no_meta
        assert result[1].metadata.name is None
        assert [o.metadata.name for o in result[2:]] == ["a", "b"]

    def test_stable_for_equal_names(self) -> None:
        """Test equal names keep their relative order."""
        first, second = _cm("x"), _cm("x")
        result = sort_kubernetes_objects([first, second])
        assert result[0] is first
        assert result[1] is second


@pytest.mark.unit
@pytest.mark.kubernetes
class TestList:
    """Test the list operation."""

    def test_ownership_selector_always_first(
        self, manager: FakeManager, backend: MagicMock
    ) -> None:
        """Test extra fragments are ANDed after the ownership fragment."""
        backend.list.return_value = []

        manager.list("a=1", None, "", "b=2", field_selector="type=Opaque")

        backend.list.assert_called_once_with(
            "higress.io/resource-definer=higress,a=1,b=2", "type=Opaque"
        )

    def test_no_extra_fragments(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test listing with only the ownership fragment."""
        backend.list.return_value = []
        manager.list()
        backend.list.assert_called_once_with("higress.io/resource-definer=higress", None)

    def test_result_sorted(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test the result is sorted by name."""
        backend.list.return_value = [_cm("beta"), _cm("alpha")]
        assert [o.metadata.name for o in manager.list()] == ["alpha", "beta"]

    def test_absent_collection_is_empty(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test an absent collection yields an empty list."""
        backend.list.return_value = None
        assert manager.list() == []

    def test_failure_raises(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test a failed query raises instead of returning an empty result."""
        backend.list.side_effect = ApiException(status=403, reason="Forbidden")
        with pytest.raises(KubernetesAuthError):
            manager.list()

    def test_failure_chains_original(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test the original ApiException is kept as the cause."""
        original = ApiException(status=500, reason="Internal")
        backend.list.side_effect = original
        with pytest.raises(KubernetesUpstreamError) as exc_info:
            manager.list()
        assert exc_info.value.__cause__ is original


@pytest.mark.unit
@pytest.mark.kubernetes
class TestRead:
    """Test the read operation."""

    def test_returns_object(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test an existing object is returned."""
        cm = _cm("cm-a")
        backend.read.return_value = cm
        assert manager.read("cm-a") is cm

    def test_not_found_returns_none(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test a 404 is reported as absence."""
        backend.read.side_effect = ApiException(status=404, reason="Not Found")
        assert manager.read("missing") is None

    def test_other_failure_raises(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test non-404 failures raise."""
        backend.read.side_effect = ApiException(status=500, reason="boom")
        with pytest.raises(KubernetesUpstreamError):
            manager.read("cm-a")


@pytest.mark.unit
@pytest.mark.kubernetes
class TestCreate:
    """Test the create operation."""

    def test_stamps_ownership_label_and_namespace(
        self, manager: FakeManager, backend: MagicMock
    ) -> None:
        """Test the submitted object carries the label and namespace."""
        backend.create.side_effect = lambda obj: obj
        cm = V1ConfigMap(metadata=V1ObjectMeta(name="cm-a", namespace="other", labels={"k": "v"}))

        result = manager.create(cm)

        submitted = backend.create.call_args.args[0]
        assert submitted.metadata.namespace == NAMESPACE
        assert submitted.metadata.labels == {
            "k": "v",
            "higress.io/resource-definer": "higress",
        }
        assert result is cm

    def test_fills_missing_metadata(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test metadata is created when absent."""
        backend.create.side_effect = lambda obj: obj
        cm = V1ConfigMap(data={"k": "v"})

        manager.create(cm)

        assert cm.metadata is not None
        assert cm.metadata.namespace == NAMESPACE
        assert cm.metadata.labels == {"higress.io/resource-definer": "higress"}

    def test_conflict(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test a duplicate name raises a conflict."""
        backend.create.side_effect = ApiException(status=409, reason="AlreadyExists")
        with pytest.raises(KubernetesConflictError):
            manager.create(_cm("cm-a"))


@pytest.mark.unit
@pytest.mark.kubernetes
class TestReplace:
    """Test the replace operation."""

    def test_replaces_by_name(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test the name from metadata addresses the object."""
        backend.replace.side_effect = lambda name, obj: obj
        cm = V1ConfigMap(metadata=V1ObjectMeta(name="cm-a", labels=None))

        manager.replace(cm)

        backend.replace.assert_called_once_with("cm-a", cm)
        assert cm.metadata.labels == {"higress.io/resource-definer": "higress"}
        assert cm.metadata.namespace == NAMESPACE

    @pytest.mark.parametrize(
        "obj",
        [V1ConfigMap(metadata=None), V1ConfigMap(metadata=V1ObjectMeta(name=None))],
        ids=["no-metadata", "no-name"],
    )
    def test_invalid_argument_before_any_call(
        self, manager: FakeManager, backend: MagicMock, obj: V1ConfigMap
    ) -> None:
        """Test missing identity is rejected without reaching the API."""
        with pytest.raises(KubernetesInvalidArgumentError):
            manager.replace(obj)
        backend.replace.assert_not_called()

    def test_stale_version_conflict(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test a stale resourceVersion raises a conflict."""
        backend.replace.side_effect = ApiException(status=409, reason="Conflict")
        with pytest.raises(KubernetesConflictError):
            manager.replace(_cm("cm-a"))


@pytest.mark.unit
@pytest.mark.kubernetes
class TestDelete:
    """Test the delete operation."""

    def test_success_status(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test a Success status completes."""
        backend.delete.return_value = V1Status(status="Success")
        manager.delete("cm-a")
        backend.delete.assert_called_once_with("cm-a")

    def test_missing_is_success(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test deleting an absent object succeeds."""
        backend.delete.side_effect = ApiException(status=404, reason="Not Found")
        manager.delete("missing")

    def test_delete_twice(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test deleting the same name twice succeeds both times."""
        backend.delete.side_effect = [
            V1Status(status="Success"),
            ApiException(status=404, reason="Not Found"),
        ]
        manager.delete("cm-a")
        manager.delete("cm-a")
        assert backend.delete.call_count == 2

    def test_failure_status_raises(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test a non-success status is an upstream error."""
        backend.delete.return_value = V1Status(
            status="Failure", code=500, message="etcd unavailable", reason="InternalError"
        )
        with pytest.raises(KubernetesUpstreamError, match="etcd unavailable") as exc_info:
            manager.delete("cm-a")
        assert exc_info.value.status_code == 500
        assert exc_info.value.reason == "InternalError"

    def test_failure_status_dict_raises(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test a dict Status reporting failure is an upstream error."""
        backend.delete.return_value = {"kind": "Status", "status": "Failure", "code": 500}
        with pytest.raises(KubernetesUpstreamError):
            manager.delete("cm-a")

    @pytest.mark.parametrize(
        "response",
        [
            None,
            V1Status(status=None),
            {"kind": "Status", "status": "Success"},
            {"kind": "WasmPlugin", "metadata": {"name": "cm-a"}},
        ],
        ids=["none", "no-outcome", "dict-success", "deleted-object"],
    )
    def test_non_failure_responses(
        self, manager: FakeManager, backend: MagicMock, response: Any
    ) -> None:
        """Test responses that do not report failure count as success."""
        backend.delete.return_value = response
        manager.delete("cm-a")

    def test_other_failure_raises(self, manager: FakeManager, backend: MagicMock) -> None:
        """Test non-404 failures raise."""
        backend.delete.side_effect = ApiException(status=401, reason="Unauthorized")
        with pytest.raises(KubernetesAuthError):
            manager.delete("cm-a")


@pytest.mark.unit
@pytest.mark.kubernetes
class TestBaseManager:
    """Test shared base manager helpers."""

    def test_namespace_from_client(self, mock_k8s_client: MagicMock) -> None:
        """Test the namespace comes from the client."""
        assert K8sBaseManager(mock_k8s_client).namespace == NAMESPACE

    def test_handle_api_error_translates(self, mock_k8s_client: MagicMock) -> None:
        """Test errors are translated with resource context."""
        manager = K8sBaseManager(mock_k8s_client)
        with pytest.raises(KubernetesNotFoundError) as exc_info:
            manager._handle_api_error(ApiException(status=404), "Ingress", "route-a", NAMESPACE)
        assert exc_info.value.resource_name == "route-a"

    def test_handle_api_error_reraises_translated(self, mock_k8s_client: MagicMock) -> None:
        """Test an already translated error is re-raised unchanged."""
        manager = K8sBaseManager(mock_k8s_client)
        error = KubernetesConflictError()
        with pytest.raises(KubernetesConflictError) as exc_info:
            manager._handle_api_error(error)
        assert exc_info.value is error
        assert exc_info.value.__cause__ is None

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ApiException(status=404), True),
            (KubernetesNotFoundError(), True),
            (ApiException(status=500), False),
            (RuntimeError("x"), False),
        ],
    )
    def test_is_not_found(self, error: Exception, expected: bool) -> None:
        """Test 404 detection on raw and translated errors."""
        assert is_not_found(error) is expected
