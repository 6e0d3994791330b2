"""Station pool - oracle-priced multi-asset pool math."""

from station.config import PoolConfig
from station.pool import PoolSnapshot, StationPool

__version__ = "0.1.0"
__all__ = ["PoolConfig", "PoolSnapshot", "StationPool", "__version__"]
