import logging

from ._exceptions import InvalidConfig, InvalidIdentifier, PartitionError
from .config import PartitionConfig
from .data import assign, assign_many, create_sample_split, partition
from .evaluation import evaluate_split
from .preprocessing import HashSplitter

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "HashSplitter",
    "InvalidConfig",
    "InvalidIdentifier",
    "PartitionConfig",
    "PartitionError",
    "assign",
    "assign_many",
    "create_sample_split",
    "evaluate_split",
    "partition",
]
