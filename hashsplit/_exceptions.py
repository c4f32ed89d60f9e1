class PartitionError(ValueError):
    """Base class for errors raised while partitioning identifiers."""


class InvalidConfig(PartitionError):
    """The modulus is below 1, or the bucket -> label table has gaps or overlaps."""


class InvalidIdentifier(PartitionError):
    """The identifier has no canonical byte encoding (e.g. it is missing)."""
