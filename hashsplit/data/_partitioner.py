import hashlib
import logging
from typing import Hashable, Iterable, List, Mapping, Tuple, Union

import pandas as pd

from .._exceptions import InvalidConfig, InvalidIdentifier
from ..config import PartitionConfig

logger = logging.getLogger(__name__)

DIGEST_NAME = "sha256"
BYTE_ORDER = "big"
ERROR_POLICIES = ("raise", "skip")

ConfigLike = Union[PartitionConfig, Mapping]


def encode_identifier(identifier) -> bytes:
    """
    Canonical byte encoding of an identifier.

    Bytes-like values are used as they are; anything else is encoded as the
    UTF-8 of ``str(identifier)``. So ``101`` and ``"101"`` share a bucket but
    ``101.0`` does not. Changing this encoding moves every identifier.

    Raises
    ------
    InvalidIdentifier
        When the identifier is missing (None, NaN, pd.NA, pd.NaT), its
        ``str()`` fails, or the text is not valid UTF-8 (e.g. lone surrogates).
    """
    if isinstance(identifier, (bytes, bytearray, memoryview)):
        return bytes(identifier)
    if pd.api.types.is_scalar(identifier) and pd.isna(identifier):
        raise InvalidIdentifier(f"cannot encode missing identifier {identifier!r}")
    try:
        text = str(identifier)
    except Exception as exc:
        raise InvalidIdentifier(f"cannot convert {type(identifier).__name__} identifier to text") from exc
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidIdentifier(f"identifier {text!r} is not valid UTF-8: {exc.reason}") from exc


def digest_identifier(identifier) -> int:
    """SHA-256 digest of the encoded identifier, read as a big-endian unsigned integer."""
    digest = hashlib.new(DIGEST_NAME, encode_identifier(identifier)).digest()
    return int.from_bytes(digest, BYTE_ORDER)


def bucket_index(identifier, modulus: int) -> int:
    return digest_identifier(identifier) % modulus


def as_config(config: ConfigLike) -> PartitionConfig:
    if isinstance(config, PartitionConfig):
        return config
    if isinstance(config, Mapping):
        return PartitionConfig.from_mapping(config)
    raise InvalidConfig(f"expected a PartitionConfig or mapping, got {type(config).__name__}")


def _check_errors(errors: str):
    if errors not in ERROR_POLICIES:
        raise ValueError(f"errors must be one of {ERROR_POLICIES}, got {errors!r}")


def assign(identifier, config: ConfigLike) -> str:
    """
    Deterministically assign an identifier to a bucket label.

    Parameters
    ----------
    identifier : hashable
        Key naming one record.
    config : PartitionConfig or mapping
        Bucket layout. Mappings are validated on every call.

    Returns
    -------
    str
        Label of the bucket the identifier's digest falls into.
    """
    config = as_config(config)
    return config.label_for(bucket_index(identifier, config.modulus))


def assign_many(identifiers: Iterable, config: ConfigLike,
                errors: str = "raise") -> List[Tuple[Hashable, str]]:
    """
    Assign every identifier, keeping input order.

    With ``errors="skip"`` identifiers that cannot be encoded are logged and
    left out instead of aborting the batch.
    """
    _check_errors(errors)
    config = as_config(config)

    assignments = []
    skipped = 0
    for identifier in identifiers:
        try:
            label = config.label_for(bucket_index(identifier, config.modulus))
        except InvalidIdentifier as exc:
            if errors == "raise":
                raise
            logger.warning("Skipping identifier: %s", exc)
            skipped += 1
            continue
        assignments.append((identifier, label))

    logger.debug("Assigned %d identifiers, skipped %d", len(assignments), skipped)
    return assignments


def partition(identifiers: Iterable, config: ConfigLike, errors: str = "raise") -> dict:
    """Group identifiers by label; every label of the config gets a list, possibly empty."""
    config = as_config(config)
    subsets = {label: [] for label in config.label_set}
    for identifier, label in assign_many(identifiers, config, errors=errors):
        subsets[label].append(identifier)
    return subsets
