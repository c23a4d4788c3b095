"""
ProcessingLib - Named image operations

This module maps operation names to executors so image transformations can
be run from parameter dictionaries.
"""

from IP_Libs.ProcessingLib.operation_registry import (
    OPERATIONS,
    get_operation,
    run_operations,
    execute_crop,
    execute_flip,
    execute_greyscale,
    execute_blur,
    execute_copy,
)

__all__ = [
    "OPERATIONS",
    "get_operation",
    "run_operations",
    "execute_crop",
    "execute_flip",
    "execute_greyscale",
    "execute_blur",
    "execute_copy",
]
