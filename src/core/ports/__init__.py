# content-ledger: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.settlement import TransferErrorCode, TransferResult, ValueTransferPort
from src.core.ports.store import LedgerStorePort
from src.core.ports.time import BlockClockPort

__all__ = [
    # Settlement
    "TransferErrorCode",
    "TransferResult",
    "ValueTransferPort",
    # Storage
    "LedgerStorePort",
    # Block time
    "BlockClockPort",
]
