"""Label and field selector composition.

Every object this layer writes carries the ownership label
``higress.io/resource-definer=higress``. List calls always start from that
fragment, so objects managed by anyone else stay invisible.
"""

from __future__ import annotations

from typing import Any

SELECTOR_SEPARATOR = ","
EQUALS_SIGN = "="

RESOURCE_DEFINER_KEY = "higress.io/resource-definer"
RESOURCE_DEFINER_VALUE = "higress"
DOMAIN_LABEL_KEY = "higress.io/domain"
WASM_PLUGIN_NAME_KEY = "higress.io/wasm-plugin-name"
WASM_PLUGIN_VERSION_KEY = "higress.io/wasm-plugin-version"
WASM_PLUGIN_BUILT_IN_KEY = "higress.io/wasm-plugin-built-in"

TYPE_FIELD = "type"


def build_label_selector(key: str, value: str) -> str:
    """Build a single ``key=value`` selector fragment."""
    return f"{key}{EQUALS_SIGN}{value}"


def join_label_selectors(*selectors: str) -> str:
    """AND together selector fragments, keeping their order.

    Zero fragments produce an empty selector, which matches everything.
    """
    return SELECTOR_SEPARATOR.join(selectors)


def build_domain_label_selector(domain: str) -> str:
    """Build the fragment selecting Ingresses generated for a domain."""
    return build_label_selector(DOMAIN_LABEL_KEY, domain)


def build_field_selector(key: str, value: str) -> str:
    """Build a single field selector fragment, e.g. ``type=kubernetes.io/tls``."""
    return f"{key}{EQUALS_SIGN}{value}"


DEFAULT_LABEL_SELECTOR = build_label_selector(RESOURCE_DEFINER_KEY, RESOURCE_DEFINER_VALUE)


def set_label(obj: Any, key: str, value: str) -> None:
    """Set one label on a Kubernetes object, leaving the other labels alone.

    Works on typed SDK objects (``V1Ingress`` and friends) and on custom
    resource models, both of which expose ``metadata.labels``. The object
    must already carry metadata.
    """
    metadata = obj.metadata
    if metadata.labels is None:
        metadata.labels = {}
    metadata.labels[key] = value
