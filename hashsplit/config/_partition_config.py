import logging
import math
import numbers
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .._exceptions import InvalidConfig

logger = logging.getLogger(__name__)


def _as_integer(value, name: str) -> int:
    # bool is an int subclass but never a meaningful count or index
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfig(f"{name} must be an integer, got {value!r}")
    return int(value)


def _check_modulus(modulus) -> int:
    modulus = _as_integer(modulus, "modulus")
    if modulus < 1:
        raise InvalidConfig(f"modulus must be at least 1, got {modulus}")
    return modulus


def _check_label(label) -> str:
    if not isinstance(label, str) or not label:
        raise InvalidConfig(f"bucket labels must be non-empty strings, got {label!r}")
    return label


@dataclass(frozen=True)
class PartitionConfig:
    """
    Immutable description of how bucket indices map to labels.

    Parameters
    ----------
    modulus : int
        Number of equally weighted buckets the digest is reduced into.
    labels : Mapping[int, str]
        Label of every bucket index in ``[0, modulus)``. Each index must be
        mapped exactly once.

    Raises
    ------
    InvalidConfig
        When the modulus is below 1 or the table does not cover every index.
    """

    modulus: int
    labels: Mapping[int, str] = field(hash=False)

    def __post_init__(self):
        modulus = _check_modulus(self.modulus)
        if not isinstance(self.labels, Mapping):
            raise InvalidConfig(f"labels must be a mapping, got {type(self.labels).__name__}")

        table = {}
        for index, label in self.labels.items():
            index = _as_integer(index, "bucket index")
            if not 0 <= index < modulus:
                raise InvalidConfig(f"bucket index {index} is outside [0, {modulus})")
            table[index] = _check_label(label)

        missing = [index for index in range(modulus) if index not in table]
        if missing:
            raise InvalidConfig(f"bucket indices {missing} have no label")

        # frozen dataclass, so bypass __setattr__ to store the read-only copy
        object.__setattr__(self, "modulus", modulus)
        object.__setattr__(self, "labels", MappingProxyType(dict(sorted(table.items()))))
        logger.debug("Built partition config with modulus %d and labels %s", modulus, self.label_set)

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from a plain dict
        return (type(self), (self.modulus, dict(self.labels)))

    @classmethod
    def binary(cls, modulus: int = 5, test_buckets: int = 1,
               test_label: str = "test", train_label: str = "train") -> "PartitionConfig":
        """Map the first ``test_buckets`` indices to ``test_label`` and the rest to ``train_label``."""
        modulus = _check_modulus(modulus)
        test_buckets = _as_integer(test_buckets, "test_buckets")
        if not 0 <= test_buckets <= modulus:
            raise InvalidConfig(f"test_buckets must be between 0 and {modulus}, got {test_buckets}")
        if test_label == train_label:
            raise InvalidConfig("test_label and train_label must differ")

        labels = {index: test_label if index < test_buckets else train_label for index in range(modulus)}
        return cls(modulus, labels)

    @classmethod
    def from_buckets(cls, buckets: Mapping[str, Iterable[int]], modulus: int) -> "PartitionConfig":
        """Build a config from ``{label: bucket indices}``; an index claimed twice is an overlap."""
        labels = {}
        for label, indices in buckets.items():
            for index in indices:
                index = _as_integer(index, "bucket index")
                if index in labels:
                    raise InvalidConfig(
                        f"bucket index {index} is mapped to both {labels[index]!r} and {label!r}"
                    )
                labels[index] = label
        return cls(modulus, labels)

    @classmethod
    def from_fractions(cls, fractions: Mapping[str, float], modulus: int = 100) -> "PartitionConfig":
        """
        Build a config from ``{label: fraction}``.

        Every ``fraction * modulus`` must be a whole number of buckets, so a
        70/30 split needs a modulus that is a multiple of 10. Labels are given
        contiguous index ranges in the order of ``fractions``; labels with no
        buckets are dropped.
        """
        modulus = _check_modulus(modulus)
        if not fractions:
            raise InvalidConfig("fractions must name at least one label")

        counts = {}
        for label, fraction in fractions.items():
            if isinstance(fraction, bool) or not isinstance(fraction, numbers.Real):
                raise InvalidConfig(f"fraction for {label!r} must be a number, got {fraction!r}")
            if not 0.0 <= fraction <= 1.0:
                raise InvalidConfig(f"fraction for {label!r} must be between 0 and 1, got {fraction}")
            n_buckets = round(fraction * modulus)
            if not math.isclose(fraction * modulus, n_buckets, abs_tol=1e-9):
                raise InvalidConfig(
                    f"fraction {fraction} for {label!r} is not a whole number of buckets out of {modulus}"
                )
            counts[label] = n_buckets

        if sum(counts.values()) != modulus:
            raise InvalidConfig(f"fractions must sum to 1, got {sum(fractions.values())}")

        buckets = {}
        start = 0
        for label, n_buckets in counts.items():
            buckets[label] = range(start, start + n_buckets)
            start += n_buckets
        return cls.from_buckets(buckets, modulus)

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "PartitionConfig":
        """Build a config from ``{"modulus": m, "labels": {index: label}}``, e.g. parsed JSON."""
        try:
            modulus = mapping["modulus"]
            raw_labels = mapping["labels"]
        except KeyError as exc:
            raise InvalidConfig(f"partition config is missing {exc.args[0]!r}") from exc

        if not isinstance(raw_labels, Mapping):
            raise InvalidConfig(f"labels must be a mapping, got {type(raw_labels).__name__}")

        labels = {}
        for index, label in raw_labels.items():
            # JSON object keys are always strings
            if isinstance(index, str):
                try:
                    index = int(index)
                except ValueError as exc:
                    raise InvalidConfig(f"bucket index {index!r} is not an integer") from exc
            if index in labels:
                raise InvalidConfig(f"bucket index {index} is mapped to both {labels[index]!r} and {label!r}")
            labels[index] = label
        return cls(modulus, labels)

    @property
    def label_set(self) -> tuple:
        """Distinct labels in bucket index order."""
        return tuple(dict.fromkeys(self.labels.values()))

    def label_for(self, index: int) -> str:
        return self.labels[index]

    def bucket_count(self, label: str) -> int:
        return sum(1 for value in self.labels.values() if value == label)

    def expected_fraction(self, label: str) -> float:
        return self.bucket_count(label) / self.modulus

    def expected_fractions(self) -> dict:
        return {label: self.expected_fraction(label) for label in self.label_set}
