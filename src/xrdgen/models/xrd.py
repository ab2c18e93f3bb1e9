"""Models for Crossplane-style CompositeResourceDefinition documents."""

import yaml
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from xrdgen.crd.base import CRDNames, CustomResourceColumnDefinition


class XRDModel(BaseModel):
    """Base class for XRD document parts. Unknown fields are ignored."""

    class Config:
        frozen = True
        populate_by_name = True


class ObjectMeta(XRDModel):
    name: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class CompositeResourceValidation(XRDModel):
    """Validation block of an XRD version.

    ``openAPIV3Schema`` is kept opaque here; it is either an already decoded
    mapping or JSON text and is only interpreted when properties are
    extracted from it.
    """

    openAPIV3Schema: Optional[Any] = None


class CompositeResourceDefinitionVersion(XRDModel):
    name: str
    served: bool
    referenceable: bool
    deprecated: Optional[bool] = None
    deprecationWarning: Optional[str] = None
    schema_: Optional[CompositeResourceValidation] = Field(
        default=None, alias="schema"
    )
    additionalPrinterColumns: List[CustomResourceColumnDefinition] = Field(
        default_factory=list
    )


class CompositeResourceDefinitionSpec(XRDModel):
    group: str
    names: CRDNames
    claimNames: Optional[CRDNames] = None
    versions: List[CompositeResourceDefinitionVersion] = Field(default_factory=list)


class CompositeResourceDefinition(XRDModel):
    """A composite resource definition (XRD)."""

    apiVersion: str = "apiextensions.crossplane.io/v1"
    kind: str = "CompositeResourceDefinition"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: CompositeResourceDefinitionSpec

    @property
    def name(self):
        return self.metadata.name

    @property
    def has_claim(self):
        return self.spec.claimNames is not None

    @classmethod
    def from_dict(cls, data):
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, text):
        data = yaml.safe_load(text)
        if not isinstance(data, dict):
            raise ValueError("XRD document is not a YAML mapping")
        return cls.from_dict(data)
