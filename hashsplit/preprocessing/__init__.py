from ._hash_splitter import HashSplitter

__all__ = ["HashSplitter"]
