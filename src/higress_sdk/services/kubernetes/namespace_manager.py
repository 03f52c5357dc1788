"""Namespace checks for the gateway's operating namespace."""

from __future__ import annotations

from higress_sdk.services.kubernetes.base import K8sBaseManager, is_not_found


class NamespaceManager(K8sBaseManager):
    """Namespace predicates used by higher layers.

    This manager only answers questions; refusing destructive operations on
    protected namespaces is the caller's job.
    """

    _entity_name = "namespace"

    def is_namespace_protected(self, namespace: str) -> bool:
        """Whether a namespace is the operating namespace or a configured protected one."""
        return namespace == self.namespace or namespace in self._client.protected_namespaces

    def gateway_namespace_exists(self) -> bool:
        """Whether the operating namespace exists in the cluster."""
        self._log.debug("checking_namespace", namespace=self.namespace)
        try:
            self._client.core_v1.read_namespace(name=self.namespace)
            return True
        except Exception as e:
            if is_not_found(e):
                return False
            self._handle_api_error(e, "Namespace", self.namespace, None)
