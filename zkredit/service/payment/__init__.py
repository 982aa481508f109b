"""
Payment routing: address normalization, fee arithmetic and settlement.
"""

from .addresses import (
    is_null_contract,
    normalize_address,
    resolve_contract_id,
    resolve_mode,
    to_account_id,
)
from .fees import (
    FEE_RATE,
    MIN_FEE,
    compute_fee,
    compute_net,
    from_smallest_unit,
    to_decimal,
    to_smallest_unit,
)
from .router import PaymentRouter

__all__ = [
    "is_null_contract",
    "normalize_address",
    "resolve_contract_id",
    "resolve_mode",
    "to_account_id",
    "FEE_RATE",
    "MIN_FEE",
    "compute_fee",
    "compute_net",
    "from_smallest_unit",
    "to_decimal",
    "to_smallest_unit",
    "PaymentRouter",
]
