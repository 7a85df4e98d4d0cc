class RecordSchemaError(ValueError):
    """Ratio table does not have the expected columns or types."""


class AmbiguousBracketError(ValueError):
    """A sample matches more than one reference injection on one side."""


class NonPositiveRatioError(ValueError):
    """Delta values are undefined for ratios <= 0."""


class MissingReferenceStandardError(KeyError):
    """No reference standard is configured for an isotopocule."""
