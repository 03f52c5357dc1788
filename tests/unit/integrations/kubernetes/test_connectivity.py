"""Unit tests for execution context detection and credential resolution."""

from __future__ import annotations

import threading
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from higress_sdk.integrations.kubernetes.config import HigressConfig, JwtPolicy
from higress_sdk.integrations.kubernetes.connectivity import (
    ConnectivityContext,
    CredentialResolver,
)
from higress_sdk.integrations.kubernetes.exceptions import KubernetesConfigurationError


@pytest.fixture
def sa_token(tmp_path: Path) -> Path:
    """Mounted service account token file."""
    path = tmp_path / "serviceaccount" / "token"
    path.parent.mkdir()
    path.write_text("sa-token\n")
    return path


@pytest.fixture
def access_token(tmp_path: Path) -> Path:
    """Mounted controller access token file."""
    path = tmp_path / "access-token" / "token"
    path.parent.mkdir()
    path.write_text("  access-token  \n")
    return path


@pytest.fixture
def kubeconfig(tmp_path: Path) -> Path:
    """An existing kubeconfig file (content is irrelevant when loading is mocked)."""
    path = tmp_path / "kubeconfig"
    path.write_text("apiVersion: v1\nkind: Config\n")
    return path


def _in_cluster_resolver(
    sa_token: Path, access_token: Path, **config: object
) -> CredentialResolver:
    return CredentialResolver(
        HigressConfig(**config),  # type: ignore[arg-type]
        service_account_token_path=sa_token,
        access_token_path=access_token,
    )


def _external_resolver(tmp_path: Path, **config: object) -> CredentialResolver:
    return CredentialResolver(
        HigressConfig(**config),  # type: ignore[arg-type]
        service_account_token_path=tmp_path / "missing-token",
        access_token_path=tmp_path / "missing-access-token",
    )


@pytest.mark.unit
@pytest.mark.kubernetes
class TestResolveConnectivity:
    """Test in-cluster detection."""

    def test_in_cluster_when_token_exists(self, sa_token: Path, access_token: Path) -> None:
        """Test a mounted token means in-cluster."""
        resolver = _in_cluster_resolver(sa_token, access_token)
        assert resolver.resolve_connectivity() == ConnectivityContext(in_cluster=True)
        assert resolver.in_cluster is True

    def test_external_when_token_missing(self, tmp_path: Path) -> None:
        """Test a missing token means external."""
        resolver = _external_resolver(tmp_path)
        assert resolver.in_cluster is False

    def test_filesystem_checked_once(self) -> None:
        """Test the token file is probed a single time across calls."""
        token_path = MagicMock(spec=Path)
        token_path.exists.return_value = True
        resolver = CredentialResolver(HigressConfig(), service_account_token_path=token_path)

        for _ in range(5):
            assert resolver.in_cluster is True
        resolver.resolve_connectivity()

        token_path.exists.assert_called_once()

    def test_concurrent_first_calls_agree(self) -> None:
        """Test concurrent first calls observe one decision and probe once."""
        token_path = MagicMock(spec=Path)
        token_path.exists.return_value = False
        resolver = CredentialResolver(HigressConfig(), service_account_token_path=token_path)

        results: list[ConnectivityContext] = []

        def resolve() -> None:
            results.append(resolver.resolve_connectivity())

        threads = [threading.Thread(target=resolve) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(result is results[0] for result in results)
        token_path.exists.assert_called_once()

    def test_context_is_immutable(self) -> None:
        """Test the context cannot be changed after publication."""
        context = ConnectivityContext(in_cluster=True)
        with pytest.raises(AttributeError):
            context.in_cluster = False  # type: ignore[misc]


@pytest.mark.unit
@pytest.mark.kubernetes
class TestBuildApiClient:
    """Test API client construction per execution context."""

    @patch("kubernetes.client")
    @patch("kubernetes.config")
    def test_in_cluster_uses_service_account(
        self,
        mock_config: MagicMock,
        mock_client: MagicMock,
        sa_token: Path,
        access_token: Path,
    ) -> None:
        """Test in-cluster execution loads the service account config."""
        resolver = _in_cluster_resolver(sa_token, access_token)

        api_client = resolver.build_api_client()

        configuration = mock_client.Configuration.return_value
        mock_config.load_incluster_config.assert_called_once_with(
            client_configuration=configuration
        )
        mock_client.ApiClient.assert_called_once_with(configuration)
        assert api_client is mock_client.ApiClient.return_value
        mock_config.new_client_from_config.assert_not_called()

    @patch("kubernetes.client")
    @patch("kubernetes.config")
    def test_in_cluster_config_failure(
        self,
        mock_config: MagicMock,
        mock_client: MagicMock,
        sa_token: Path,
        access_token: Path,
    ) -> None:
        """Test an unloadable in-cluster config is a configuration error."""
        from kubernetes.config import ConfigException

        mock_config.load_incluster_config.side_effect = ConfigException("no host env")
        resolver = _in_cluster_resolver(sa_token, access_token)

        with pytest.raises(KubernetesConfigurationError, match="in-cluster"):
            resolver.build_api_client()

    @patch("kubernetes.config")
    def test_external_uses_kubeconfig(
        self, mock_config: MagicMock, tmp_path: Path, kubeconfig: Path
    ) -> None:
        """Test external execution loads the configured kubeconfig."""
        resolver = _external_resolver(tmp_path, kubeconfig=str(kubeconfig))

        api_client = resolver.build_api_client()

        mock_config.new_client_from_config.assert_called_once_with(config_file=str(kubeconfig))
        assert api_client is mock_config.new_client_from_config.return_value
        mock_config.load_incluster_config.assert_not_called()

    @patch("kubernetes.config")
    def test_external_missing_kubeconfig(self, mock_config: MagicMock, tmp_path: Path) -> None:
        """Test a missing kubeconfig fails before any loading."""
        resolver = _external_resolver(tmp_path, kubeconfig=str(tmp_path / "nope"))

        with pytest.raises(KubernetesConfigurationError, match="Kubeconfig not found"):
            resolver.build_api_client()
        mock_config.new_client_from_config.assert_not_called()

    @patch("kubernetes.config")
    def test_external_unparsable_kubeconfig(
        self, mock_config: MagicMock, tmp_path: Path, kubeconfig: Path
    ) -> None:
        """Test a kubeconfig the client rejects is a configuration error."""
        from kubernetes.config import ConfigException

        mock_config.new_client_from_config.side_effect = ConfigException("Invalid kube-config")
        resolver = _external_resolver(tmp_path, kubeconfig=str(kubeconfig))

        with pytest.raises(KubernetesConfigurationError) as exc_info:
            resolver.build_api_client()
        assert isinstance(exc_info.value.original_error, ConfigException)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestControllerCredentials:
    """Test controller token and address resolution."""

    def test_external_token_from_config(self, tmp_path: Path) -> None:
        """Test the static token is used outside the cluster."""
        resolver = _external_resolver(tmp_path, controller_access_token="static")
        assert resolver.resolve_controller_token() == "static"

    def test_external_token_empty_by_default(self, tmp_path: Path) -> None:
        """Test no token is configured by default."""
        assert _external_resolver(tmp_path).resolve_controller_token() == ""

    def test_in_cluster_third_party_reads_access_token(
        self, sa_token: Path, access_token: Path
    ) -> None:
        """Test third-party policy reads the separately mounted token, trimmed."""
        resolver = _in_cluster_resolver(sa_token, access_token)
        assert resolver.resolve_controller_token() == "access-token"

    def test_in_cluster_first_party_reads_service_account(
        self, sa_token: Path, access_token: Path
    ) -> None:
        """Test first-party policy reads the service account token."""
        resolver = _in_cluster_resolver(
            sa_token, access_token, controller_jwt_policy=JwtPolicy.FIRST_PARTY
        )
        assert resolver.resolve_controller_token() == "sa-token"

    def test_in_cluster_unknown_policy_reads_access_token(
        self, sa_token: Path, access_token: Path
    ) -> None:
        """Test any policy other than first-party reads the access token."""
        resolver = _in_cluster_resolver(
            sa_token, access_token, controller_jwt_policy="istio-third-party"
        )
        assert resolver.resolve_controller_token() == "access-token"

    def test_in_cluster_missing_token_file_propagates(
        self, sa_token: Path, tmp_path: Path
    ) -> None:
        """Test an unreadable token file raises OSError."""
        resolver = _in_cluster_resolver(sa_token, tmp_path / "missing")
        with pytest.raises(OSError):
            resolver.resolve_controller_token()

    def test_in_cluster_token_reread_on_each_call(
        self, sa_token: Path, access_token: Path
    ) -> None:
        """Test a rotated token file is picked up."""
        resolver = _in_cluster_resolver(sa_token, access_token)
        assert resolver.resolve_controller_token() == "access-token"
        access_token.write_text("rotated")
        assert resolver.resolve_controller_token() == "rotated"

    def test_in_cluster_address(self, sa_token: Path, access_token: Path) -> None:
        """Test the in-cluster address is service.namespace."""
        resolver = _in_cluster_resolver(sa_token, access_token)
        assert resolver.controller_address() == "higress-controller.higress-system"
        assert resolver.controller_base_url() == "http://higress-controller.higress-system:15014"

    def test_external_address(self, tmp_path: Path) -> None:
        """Test the external address is the configured host."""
        resolver = _external_resolver(
            tmp_path, controller_service_host="10.0.0.5", controller_service_port=8080
        )
        assert resolver.controller_base_url() == "http://10.0.0.5:8080"
