from dataclasses import dataclass

from src.domain.entities import Principal


@dataclass(frozen=True)
class CallContext:
    """Caller identity and block height supplied by the host for one call."""

    caller: Principal
    block_height: int = 0
