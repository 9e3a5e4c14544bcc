from .engine import TransferEngine, TransferOutcome, TransferRequest, TransferResult

__all__ = [
    "TransferEngine",
    "TransferOutcome",
    "TransferRequest",
    "TransferResult",
]
