"""Errors raised while deriving CRDs from composite resource definitions."""


class XRDGenError(Exception):
    """Base class for all xrdgen errors."""


class SchemaParseError(XRDGenError):
    """A version's raw validation schema could not be parsed."""

    def __init__(self, field, reason, version=None):
        self.field = field
        self.reason = reason
        self.version = version
        where = f" of version {version!r}" if version else ""
        super().__init__(
            f'cannot get "{field}" properties from validation schema{where}: '
            f"cannot parse validation schema: {reason}"
        )


class InvalidClaimNamesError(XRDGenError):
    """The claim names of an XRD cannot be used to derive a claim CRD."""

    def __init__(self, message):
        super().__init__(f"invalid resource claim names: {message}")


class MissingClaimNamesError(InvalidClaimNamesError):
    def __init__(self):
        super().__init__("missing names")


class ConflictingNameError(InvalidClaimNamesError):
    """A claim name equals the corresponding composite resource name."""

    def __init__(self, field, name):
        self.field = field
        self.name = name
        super().__init__(f'"{name}" conflicts with composite resource name')


class XRDLoadError(XRDGenError):
    """An XRD document could not be read or is not a valid XRD."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot load XRD from {path}: {reason}")


class DirectoryNotFoundError(XRDGenError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Directory not found: {path}")
