import copy

import pytest
import yaml

from xrdgen.models.xrd import CompositeResourceDefinition

CLUSTER_XRD = {
    "apiVersion": "apiextensions.crossplane.io/v1",
    "kind": "CompositeResourceDefinition",
    "metadata": {
        "name": "compositeclusters.punasusi.com",
        "labels": {"provider": "gcp"},
    },
    "spec": {
        "group": "punasusi.com",
        "names": {"kind": "CompositeCluster", "plural": "compositeclusters"},
        "claimNames": {"kind": "ClusterClaim", "plural": "clusterclaims"},
        "versions": [
            {
                "name": "v1alpha1",
                "served": True,
                "referenceable": True,
                "additionalPrinterColumns": [
                    {
                        "name": "clusterName",
                        "type": "string",
                        "jsonPath": ".status.clusterName",
                    }
                ],
                "schema": {
                    "openAPIV3Schema": {
                        "type": "object",
                        "properties": {
                            "spec": {
                                "type": "object",
                                "properties": {
                                    "id": {
                                        "type": "string",
                                        "description": "ID of this Cluster",
                                    },
                                    "parameters": {
                                        "type": "object",
                                        "properties": {
                                            "version": {"type": "string"},
                                            "nodeSize": {"type": "string"},
                                        },
                                        "required": ["nodeSize"],
                                    },
                                },
                                "required": ["id", "parameters"],
                            },
                            "status": {
                                "type": "object",
                                "properties": {
                                    "clusterName": {
                                        "type": "string",
                                        "description": "The name of the cluster",
                                    },
                                },
                                "required": ["clusterName"],
                            },
                        },
                    }
                },
            },
        ],
    },
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("XRD_PATTERNS", "CRD_OUTPUT_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def xrd_dict():
    return copy.deepcopy(CLUSTER_XRD)


@pytest.fixture
def make_xrd(xrd_dict):
    """Build an XRD from the cluster fixture after applying ``mutate``."""

    def _make(mutate=None):
        data = copy.deepcopy(xrd_dict)
        if mutate is not None:
            mutate(data)
        return CompositeResourceDefinition.from_dict(data)

    return _make


@pytest.fixture
def xrd(make_xrd):
    return make_xrd()


@pytest.fixture
def write_xrd(tmp_path):
    """Write an XRD document to ``<tmp>/<directory>/<filename>``."""

    def _write(data, directory="cluster", filename="xrd.yaml"):
        path = tmp_path / directory / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write
