from ._partitioner import (
    assign,
    assign_many,
    bucket_index,
    digest_identifier,
    encode_identifier,
    partition,
)
from ._sample_split import create_sample_split

__all__ = [
    "assign",
    "assign_many",
    "bucket_index",
    "create_sample_split",
    "digest_identifier",
    "encode_identifier",
    "partition",
]
