"""
Usage Unit/Amount Normalizer

Providers report some usage in seconds and some in GB-hours with inconsistent
unit labels. Exactly one conversion applies per row.
"""

from enum import Enum
from typing import NamedTuple

SECONDS_PER_HOUR = 3600


class KnownUsageUnit(str, Enum):
    HOURS = "Hours"
    SECONDS = "Seconds"
    GB_HOURS = "GB-Hours"


class NormalizedUsage(NamedTuple):
    amount: float
    unit: str


def is_redshift_compute_usage(service_name: str, usage_unit: str) -> bool:
    return service_name == "AmazonRedshift" and usage_unit == KnownUsageUnit.SECONDS.value


def normalize_usage(
    service_name: str,
    usage_type: str,
    usage_unit: str,
    usage_amount: float,
) -> NormalizedUsage:
    """
    Convert service-specific units into a canonical (amount, unit) pair.

    Rules (first match wins):
    1. Redshift compute reported in seconds -> hours
    2. Fargate memory usage -> GB-Hours, amount unchanged
    3. Pass-through
    """
    if is_redshift_compute_usage(service_name, usage_unit):
        return NormalizedUsage(usage_amount / SECONDS_PER_HOUR, KnownUsageUnit.HOURS.value)
    if "Fargate-GB-Hours" in usage_type:
        return NormalizedUsage(usage_amount, KnownUsageUnit.GB_HOURS.value)
    return NormalizedUsage(usage_amount, usage_unit)
