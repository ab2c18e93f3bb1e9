"""Validation of claim names against composite resource names."""

from xrdgen.exception import ConflictingNameError, MissingClaimNamesError


def validate_claim_names(xrd):
    """Check that the XRD's claim names do not collide with its names.

    Raises:
        MissingClaimNamesError: If the XRD declares no claim names
        ConflictingNameError: On the first claim name equal to the
            corresponding composite name
    """
    claim_names = xrd.spec.claimNames
    if claim_names is None:
        raise MissingClaimNamesError()

    names = xrd.spec.names

    if claim_names.kind == names.kind:
        raise ConflictingNameError("kind", claim_names.kind)

    if claim_names.plural == names.plural:
        raise ConflictingNameError("plural", claim_names.plural)

    if claim_names.singular and claim_names.singular == names.singular:
        raise ConflictingNameError("singular", claim_names.singular)

    if claim_names.listKind and claim_names.listKind == names.listKind:
        raise ConflictingNameError("listKind", claim_names.listKind)
