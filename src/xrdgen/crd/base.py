"""Models for the generated CustomResourceDefinition documents."""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

CRD_API_VERSION = "apiextensions.k8s.io/v1"
CRD_KIND = "CustomResourceDefinition"

SCOPE_CLUSTER = "Cluster"
SCOPE_NAMESPACED = "Namespaced"


class CRDModel(BaseModel):
    """Base class for immutable CRD document parts."""

    class Config:
        frozen = True
        populate_by_name = True


class CRDNames(CRDModel):
    """Kind and resource names of a CRD (also used for XRD names)."""

    kind: str
    plural: str
    singular: Optional[str] = None
    listKind: Optional[str] = None
    shortNames: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)

    @field_validator("singular", "listKind", mode="before")
    @classmethod
    def empty_as_unset(cls, value):
        return value or None

    def with_category(self, category):
        """Return a copy with ``category`` appended to the categories."""
        return self.model_copy(update={"categories": [*self.categories, category]})


class CustomResourceColumnDefinition(CRDModel):
    """Additional printer column shown by ``kubectl get``."""

    name: str
    type: str
    jsonPath: str
    description: Optional[str] = None
    format: Optional[str] = None
    priority: Optional[int] = None


class CustomResourceValidation(CRDModel):
    openAPIV3Schema: Dict[str, Any]


class CRDSubresources(CRDModel):
    status: Dict[str, Any]


class CRDVersion(CRDModel):
    """One served version of a generated CRD."""

    name: str
    served: bool
    storage: bool
    deprecated: bool = False
    deprecationWarning: Optional[str] = None
    additionalPrinterColumns: List[CustomResourceColumnDefinition] = Field(
        default_factory=list
    )
    schema_: CustomResourceValidation = Field(alias="schema")
    subresources: CRDSubresources

    @property
    def openapi_schema(self):
        return self.schema_.openAPIV3Schema


class CRDMetadata(CRDModel):
    name: str
    labels: Dict[str, str] = Field(default_factory=dict)


class CRDSpecification(CRDModel):
    group: str
    names: CRDNames
    scope: str
    versions: List[CRDVersion]


class CustomResourceDefinition(CRDModel):
    """A generated CustomResourceDefinition."""

    apiVersion: str = CRD_API_VERSION
    kind: str = CRD_KIND
    metadata: CRDMetadata
    spec: CRDSpecification

    @property
    def name(self):
        return self.metadata.name

    @property
    def filename(self):
        """File name the CRD is written to: ``<group>_<plural>.yaml``."""
        return f"{self.spec.group}_{self.spec.names.plural}.yaml"

    def to_manifest(self):
        """Return the CRD as a plain dict ready for YAML serialisation.

        Fields left at their defaults (empty lists, ``deprecated: false``,
        unset optionals) are omitted.
        """
        body = self.model_dump(
            by_alias=True,
            exclude_defaults=True,
            exclude={"apiVersion", "kind"},
        )
        return {"apiVersion": self.apiVersion, "kind": self.kind, **body}
