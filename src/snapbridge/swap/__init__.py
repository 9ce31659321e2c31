"""Unsigned swap construction.

SECURITY: Nothing in this package signs or broadcasts; it only prepares
transaction data for the snap.
"""

from snapbridge.swap.builder import build_swap, encode_exact_input_single, read_environment
from snapbridge.swap.contracts import SwapParams, SwapTransaction

__all__ = [
    "SwapParams",
    "SwapTransaction",
    "build_swap",
    "encode_exact_input_single",
    "read_environment",
]
