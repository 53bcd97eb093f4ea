"""
bulkbridge - Bridge between a spreadsheet sidebar and bulk editor operations

Parses sidebar job payloads, dispatches them to named operations, and
returns serialized results or serialized failures.
"""

__version__ = "0.1.0"


__all__ = [
    "BridgeServices",
    "BulkbridgeConfig",
    "Dispatcher",
    "InvocationResult",
    "JobFailure",
    "load_config",
    "safe_parse",
]

from .config import BulkbridgeConfig, load_config
from .dispatch import Dispatcher
from .envelope import safe_parse
from .errors import JobFailure
from .result import InvocationResult
from .services import BridgeServices
