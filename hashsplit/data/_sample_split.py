import logging
from typing import Optional

import pandas as pd

from .._exceptions import InvalidConfig, InvalidIdentifier
from ..config import PartitionConfig, get_settings
from ._partitioner import _check_errors, bucket_index

logger = logging.getLogger(__name__)


def create_sample_split(df: pd.DataFrame, id_column: str, training_frac: float = 0.8,
                        modulus: Optional[int] = None, sample_column: Optional[str] = None,
                        config: Optional[PartitionConfig] = None, errors: str = "raise") -> pd.DataFrame:
    """
    Create sample split based on ID column.

    Parameters
    ----------
    df : pd.DataFrame
        Training data
    id_column : str
        Name of ID column
    training_frac : float, optional
        Fraction to use for training, by default 0.8. Ignored when ``config`` is given.
    modulus : int, optional
        Number of hash buckets, by default taken from the settings (100).
    sample_column : str, optional
        Name of the output column, by default taken from the settings ("sample").
    config : PartitionConfig, optional
        Explicit bucket layout, e.g. for a train/validation/test split.
    errors : {"raise", "skip"}
        "skip" leaves a missing label for IDs that cannot be hashed.

    Returns
    -------
    pd.DataFrame
        Copy of the data with a sample column containing the split based on IDs.
    """
    _check_errors(errors)
    if id_column not in df.columns:
        raise KeyError(f"{id_column} not found in dataframe columns.")

    settings = get_settings()
    if sample_column is None:
        sample_column = settings.sample_column
    if not isinstance(sample_column, str) or not sample_column:
        raise ValueError(f"sample_column must be a non-empty string, got {sample_column!r}")
    if modulus is None:
        modulus = settings.modulus
    if config is None:
        if not 0.0 <= training_frac <= 1.0:
            raise InvalidConfig(f"training_frac must be between 0 and 1, got {training_frac}")
        config = PartitionConfig.from_fractions(
            {"train": training_frac, "test": 1.0 - training_frac},
            modulus=modulus,
        )

    def _label(identifier):
        try:
            return config.label_for(bucket_index(identifier, config.modulus))
        except InvalidIdentifier as exc:
            if errors == "raise":
                raise
            logger.warning("No sample for %s value: %s", id_column, exc)
            return None

    # Low buckets are train, so the same IDs stay in train as training_frac grows
    df = df.copy()
    df[sample_column] = pd.Series([_label(identifier) for identifier in df[id_column]], index=df.index, dtype=object)
    logger.debug("Split %d rows on %s into %s", len(df), id_column, config.label_set)

    return df
