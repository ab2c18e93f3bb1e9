"""Schema fragments and printer columns injected into every generated CRD.

Every function returns a freshly built value so that callers can mutate the
result without affecting other versions or other CRDs.
"""

from .base import CustomResourceColumnDefinition

CATEGORY_COMPOSITE = "composite"
CATEGORY_CLAIM = "claim"

ALPHA_DESCRIPTION = "Alpha: This field may be deprecated or changed without notice."

# Spec fields a claim propagates to its composite resource.
PROPAGATE_SPEC_PROPS = (
    "compositionRef",
    "compositionSelector",
    "compositionRevisionRef",
    "compositionUpdatePolicy",
)


def _string_map():
    return {"type": "object", "additionalProperties": {"type": "string"}}


def _name_ref(description=None):
    ref = {
        "type": "object",
        "required": ["name"],
        "properties": {"name": {"type": "string"}},
    }
    if description:
        ref["description"] = description
    return ref


def _string_enum(values, default, description=None):
    prop = {"type": "string", "enum": list(values), "default": default}
    if description:
        prop["description"] = description
    return prop


def _object_ref(*fields, required=None):
    return {
        "type": "object",
        "required": list(required if required is not None else fields),
        "properties": {field: {"type": "string"} for field in fields},
    }


def _publish_connection_details_to():
    return {
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": {"type": "string"},
            "configRef": {
                "type": "object",
                "default": {"name": "default"},
                "properties": {"name": {"type": "string"}},
            },
            "metadata": {
                "type": "object",
                "properties": {
                    "labels": _string_map(),
                    "annotations": _string_map(),
                    "type": {"type": "string"},
                },
            },
        },
    }


def _composition_props(alpha_description=None):
    return {
        "compositionRef": _name_ref(),
        "compositionSelector": {
            "type": "object",
            "required": ["matchLabels"],
            "properties": {"matchLabels": _string_map()},
        },
        "compositionRevisionRef": _name_ref(alpha_description),
        "compositionUpdatePolicy": _string_enum(
            ["Automatic", "Manual"], "Automatic", alpha_description
        ),
    }


def base_props():
    """Envelope schema shared by every version of every generated CRD."""
    return {
        "type": "object",
        "required": ["spec"],
        "properties": {
            "apiVersion": {"type": "string"},
            "kind": {"type": "string"},
            # The API server validates metadata itself.
            "metadata": {"type": "object"},
            "spec": {"type": "object", "properties": {}},
            "status": {"type": "object", "properties": {}},
        },
    }


def composite_resource_spec_props():
    """Spec fields expected on every composite resource."""
    props = _composition_props(ALPHA_DESCRIPTION)
    props.update(
        {
            "claimRef": _object_ref("apiVersion", "kind", "namespace", "name"),
            "resourceRefs": {
                "type": "array",
                "items": _object_ref(
                    "apiVersion", "name", "kind", required=["apiVersion", "kind"]
                ),
            },
            "publishConnectionDetailsTo": _publish_connection_details_to(),
            "writeConnectionSecretToRef": _object_ref("name", "namespace"),
        }
    )
    return props


def composite_resource_claim_spec_props():
    """Spec fields expected on every composite resource claim."""
    props = _composition_props()
    props.update(
        {
            "compositeDeletePolicy": _string_enum(
                ["Background", "Foreground"], "Background"
            ),
            "resourceRef": _object_ref("apiVersion", "kind", "name"),
            "publishConnectionDetailsTo": _publish_connection_details_to(),
            # The namespace is always the claim's own.
            "writeConnectionSecretToRef": _object_ref("name"),
        }
    )
    return props


def composite_resource_status_props():
    """Status fields shared by composite resources and claims."""
    return {
        "conditions": {
            "description": "Conditions of the resource.",
            "type": "array",
            "items": {
                "type": "object",
                "required": ["lastTransitionTime", "reason", "status", "type"],
                "properties": {
                    "lastTransitionTime": {"type": "string", "format": "date-time"},
                    "message": {"type": "string"},
                    "reason": {"type": "string"},
                    "status": {"type": "string"},
                    "type": {"type": "string"},
                },
            },
        },
        "connectionDetails": {
            "type": "object",
            "properties": {
                "lastPublishedTime": {"type": "string", "format": "date-time"},
            },
        },
    }


def _condition_columns():
    return [
        CustomResourceColumnDefinition(
            name="SYNCED",
            type="string",
            jsonPath=".status.conditions[?(@.type=='Synced')].status",
        ),
        CustomResourceColumnDefinition(
            name="READY",
            type="string",
            jsonPath=".status.conditions[?(@.type=='Ready')].status",
        ),
    ]


def _age_column():
    return CustomResourceColumnDefinition(
        name="AGE", type="date", jsonPath=".metadata.creationTimestamp"
    )


def composite_resource_printer_columns():
    """Default printer columns of every composite resource CRD."""
    return [
        *_condition_columns(),
        CustomResourceColumnDefinition(
            name="COMPOSITION", type="string", jsonPath=".spec.compositionRef.name"
        ),
        _age_column(),
    ]


def composite_resource_claim_printer_columns():
    """Default printer columns of every composite resource claim CRD."""
    return [
        *_condition_columns(),
        CustomResourceColumnDefinition(
            name="CONNECTION-SECRET",
            type="string",
            jsonPath=".spec.writeConnectionSecretToRef.name",
        ),
        _age_column(),
    ]
