from typing import Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from ..config import PartitionConfig
from ..data import bucket_index


class HashSplitter(TransformerMixin, BaseEstimator):
    """
    Label rows train/test by hashing their IDs.

    Works as a transformer (``transform`` returns one label per row) and as a
    single-fold cross-validation splitter (``split`` / ``get_n_splits``), so
    it can be passed as ``cv=`` to scikit-learn model selection helpers.
    """

    def __init__(self, modulus: int = 5, test_buckets: int = 1, test_label: str = "test",
                 train_label: str = "train", id_column: Optional[str] = None):
        self.modulus = modulus
        self.test_buckets = test_buckets
        self.test_label = test_label
        self.train_label = train_label
        self.id_column = id_column

    def _build_config(self) -> PartitionConfig:
        return PartitionConfig.binary(self.modulus, self.test_buckets, self.test_label, self.train_label)

    def _ids(self, X):
        if isinstance(X, pd.DataFrame):
            if self.id_column is not None:
                return X[self.id_column].to_numpy()
            if X.shape[1] != 1:
                raise ValueError("id_column must be set when X has more than one column")
            return X.iloc[:, 0].to_numpy()
        if isinstance(X, pd.Series):
            return X.to_numpy()

        X = np.asarray(X, dtype=object)
        if X.ndim == 2 and X.shape[1] == 1:
            return X[:, 0]
        if X.ndim != 1:
            raise ValueError(f"expected a 1-D array of IDs or a single column, got shape {X.shape}")
        return X

    def _labels(self, ids, config):
        return np.array([config.label_for(bucket_index(i, config.modulus)) for i in ids], dtype=object)

    def fit(self, X, y=None):
        self.config_ = self._build_config()
        return self

    def transform(self, X):
        check_is_fitted(self)
        return self._labels(self._ids(X), self.config_)

    def get_n_splits(self, X=None, y=None, groups=None):
        return 1

    def split(self, X, y=None, groups=None):
        """
        Yield one ``(train_indices, test_indices)`` pair.

        When ``groups`` is given the groups are hashed instead of the IDs, so
        every row of a group lands on the same side.
        """
        config = self._build_config()
        keys = self._ids(X) if groups is None else np.asarray(groups, dtype=object).ravel()
        labels = self._labels(keys, config)
        yield np.flatnonzero(labels == self.train_label), np.flatnonzero(labels == self.test_label)
