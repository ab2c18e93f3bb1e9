"""Derive composite and claim CRDs from a composite resource definition."""

import logging
from typing import Callable, NamedTuple

from .base import (
    CRDMetadata,
    CRDSpecification,
    CRDSubresources,
    CRDVersion,
    CustomResourceDefinition,
    CustomResourceValidation,
    SCOPE_CLUSTER,
    SCOPE_NAMESPACED,
)
from .catalog import (
    CATEGORY_CLAIM,
    CATEGORY_COMPOSITE,
    base_props,
    composite_resource_claim_printer_columns,
    composite_resource_claim_spec_props,
    composite_resource_printer_columns,
    composite_resource_spec_props,
    composite_resource_status_props,
)
from .names import validate_claim_names
from .props import get_props, merge_props

logger = logging.getLogger(__name__)


class CRDVariant(NamedTuple):
    """What differs between the composite and the claim CRD."""

    scope: str
    category: str
    spec_props: Callable[[], dict]
    printer_columns: Callable[[], list]


COMPOSITE = CRDVariant(
    scope=SCOPE_CLUSTER,
    category=CATEGORY_COMPOSITE,
    spec_props=composite_resource_spec_props,
    printer_columns=composite_resource_printer_columns,
)

CLAIM = CRDVariant(
    scope=SCOPE_NAMESPACED,
    category=CATEGORY_CLAIM,
    spec_props=composite_resource_claim_spec_props,
    printer_columns=composite_resource_claim_printer_columns,
)


def build_schema(version, variant):
    """Assemble the OpenAPI schema of one version.

    User-declared spec and status properties are overlaid with the framework
    fields of ``variant``; framework fields win on name collisions. The
    user's spec required list is appended to the envelope's, the user's
    status required list replaces the envelope's.
    """
    schema = base_props()
    validation = version.schema_

    spec_user, spec_required = get_props("spec", validation, version=version.name)
    spec = schema["properties"]["spec"]
    spec["required"] = spec.get("required", []) + spec_required
    spec["properties"] = merge_props(
        spec["properties"], spec_user, variant.spec_props()
    )

    status_user, status_required = get_props(
        "status", validation, version=version.name
    )
    status = schema["properties"]["status"]
    status["required"] = status_required
    status["properties"] = merge_props(
        status["properties"], status_user, composite_resource_status_props()
    )

    # Omit empty required lists.
    for part in (spec, status):
        if not part["required"]:
            del part["required"]

    return schema


def build_version(version, variant):
    """Build the CRD version corresponding to one XRD version."""
    return CRDVersion(
        name=version.name,
        served=version.served,
        storage=version.referenceable,
        deprecated=bool(version.deprecated),
        deprecationWarning=version.deprecationWarning,
        additionalPrinterColumns=[
            *version.additionalPrinterColumns,
            *variant.printer_columns(),
        ],
        schema=CustomResourceValidation(openAPIV3Schema=build_schema(version, variant)),
        subresources=CRDSubresources(status={}),
    )


def build_crd(xrd, name, names, variant):
    """Build a CRD for ``xrd`` with the given name, names and variant."""
    versions = [build_version(v, variant) for v in xrd.spec.versions]

    crd = CustomResourceDefinition(
        metadata=CRDMetadata(name=name, labels=dict(xrd.metadata.labels)),
        spec=CRDSpecification(
            group=xrd.spec.group,
            names=names.with_category(variant.category),
            scope=variant.scope,
            versions=versions,
        ),
    )
    logger.debug(
        f"Derived {variant.category} CRD {name} with {len(versions)} version(s)"
    )
    return crd


def for_composite_resource(xrd):
    """Derive the cluster scoped CRD of the composite resource.

    Raises:
        SchemaParseError: If any version's schema cannot be parsed
    """
    return build_crd(xrd, xrd.metadata.name, xrd.spec.names, COMPOSITE)


def for_composite_resource_claim(xrd):
    """Derive the namespaced CRD of the composite resource claim.

    Raises:
        MissingClaimNamesError: If the XRD declares no claim names
        ConflictingNameError: If a claim name equals a composite name
        SchemaParseError: If any version's schema cannot be parsed
    """
    validate_claim_names(xrd)

    claim_names = xrd.spec.claimNames
    name = f"{claim_names.plural}.{xrd.spec.group}"
    return build_crd(xrd, name, claim_names, CLAIM)
