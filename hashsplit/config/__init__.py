from ._logging import JsonFormatter, configure_logging
from ._partition_config import PartitionConfig
from ._settings import SplitSettings, get_settings

__all__ = ["JsonFormatter", "PartitionConfig", "SplitSettings", "configure_logging", "get_settings"]
