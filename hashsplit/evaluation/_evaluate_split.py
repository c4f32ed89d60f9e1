from typing import Optional

import numpy as np
import pandas as pd

from ..config import PartitionConfig


def evaluate_split(labels, config: Optional[PartitionConfig] = None) -> pd.DataFrame:
    """
    Compare the observed share of each label with the share the config implies.

    Parameters:
        labels (array-like): Assigned label per record; missing entries are ignored.
        config (PartitionConfig, optional): Bucket layout the labels came from.

    Returns:
        pd.DataFrame: Labels as index with Count and Observed columns, plus
        Expected and Deviation when a config is given.
    """
    labels = pd.Series(np.asarray(labels, dtype=object)).dropna()
    counts = labels.value_counts(sort=False)

    # Config labels first, in bucket order, then anything the config does not know
    if config is not None:
        order = list(config.label_set) + [label for label in counts.index if label not in config.label_set]
        counts = counts.reindex(order, fill_value=0)

    total = counts.sum()
    report = pd.DataFrame({"Count": counts.astype(int)})
    report["Observed"] = counts / total if total else 0.0

    if config is not None:
        expected = config.expected_fractions()
        report["Expected"] = [expected.get(label, 0.0) for label in report.index]
        report["Deviation"] = report["Observed"] - report["Expected"]

    report.index.name = "Label"
    return report
