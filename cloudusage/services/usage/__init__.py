"""Usage Normalization - CUR rows to canonical compute usage."""

from cloudusage.services.usage.compute_estimator import ComputeUsageEstimator, UsageLine
from cloudusage.services.usage.record import UsageRecordAssembler, normalize_rows, zip_row

__all__ = [
    "ComputeUsageEstimator",
    "UsageLine",
    "UsageRecordAssembler",
    "normalize_rows",
    "zip_row",
]
