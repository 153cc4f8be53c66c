"""
Record Assembler

Builds one NormalizedUsageRecord per CUR row:

1. Validate the upstream contract (required fields, numbers, timestamp)
2. Correct the usage type suffix once; every later step reads the corrected value
3. Normalize unit/amount and resolve the instance type
4. Estimate vCPU/GPU hours and resolve the replication factor
5. Classify processors from the resolved instance type
6. Resolve the account display name

A bad row raises UsageRowError. normalize_rows() isolates such failures so the
rest of the batch is still normalized.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Sequence
import structlog
from pydantic import ValidationError

from cloudusage.core.config import get_settings
from cloudusage.core.exceptions import UsageRowError
from cloudusage.schemas.usage import NormalizedUsageRecord, RawUsageField, RawUsageRow
from cloudusage.services.usage.accounts import AccountDirectory
from cloudusage.services.usage.compute_estimator import ComputeUsageEstimator, UsageLine
from cloudusage.services.usage.instance_resolver import correct_usage_type_suffix, resolve_instance_type
from cloudusage.services.usage.instance_types import TABLES_VERSION
from cloudusage.services.usage.processors import classify_compute, classify_gpu
from cloudusage.services.usage.replication_factors import resolve_replication_factor
from cloudusage.services.usage.units import normalize_usage

logger = structlog.get_logger()


def zip_row(header: Sequence[str], values: Sequence[str]) -> RawUsageRow:
    """Pair column names with values. Missing trailing values become empty strings."""
    return {column: values[i] if i < len(values) else "" for i, column in enumerate(header)}


def _parse_float(row: RawUsageRow, field_name: str) -> float:
    raw = row.get(field_name)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise UsageRowError(
            f"Field '{field_name}' is not a number",
            details={"field": field_name, "value": raw},
        )
    if not math.isfinite(value):
        raise UsageRowError(
            f"Field '{field_name}' is not a finite number",
            details={"field": field_name, "value": raw},
        )
    return value


def _parse_optional_float(raw: Optional[str]) -> Optional[float]:
    """Report-supplied counts are optional; blanks, junk and non-positive values mean 'not supplied'."""
    if raw is None or str(raw).strip() == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) and value > 0 else None


def _parse_timestamp(row: RawUsageRow) -> datetime:
    raw = row.get(RawUsageField.TIMESTAMP)
    try:
        return datetime.fromisoformat(str(raw).strip().replace("Z", "+00:00"))
    except ValueError:
        raise UsageRowError(
            "Field 'timestamp' is not an ISO timestamp",
            details={"field": RawUsageField.TIMESTAMP, "value": raw},
        )


class UsageRecordAssembler:
    """
    Orchestrates the normalization components for single rows.
    Holds no per-row state, so one assembler serves a whole batch.
    """

    def __init__(
        self,
        estimator: Optional[ComputeUsageEstimator] = None,
        accounts: Optional[AccountDirectory] = None,
        cloud_provider: Optional[str] = None,
    ):
        self.estimator = estimator or ComputeUsageEstimator()
        self.accounts = accounts or AccountDirectory()
        self.cloud_provider = cloud_provider or get_settings().CLOUD_PROVIDER

    def build(self, row: RawUsageRow) -> NormalizedUsageRecord:
        missing = [name for name in RawUsageField.REQUIRED if row.get(name) is None]
        if missing:
            raise UsageRowError(
                "Usage row is missing required fields",
                details={"missing_fields": missing},
            )

        service_name = row[RawUsageField.SERVICE_NAME]
        usage_type = correct_usage_type_suffix(row[RawUsageField.USAGE_TYPE])
        region = row[RawUsageField.REGION]
        account_id = row[RawUsageField.ACCOUNT]

        usage_amount = _parse_float(row, RawUsageField.USAGE_AMOUNT)
        if usage_amount < 0:
            raise UsageRowError(
                "Field 'usageAmount' must not be negative",
                details={"field": RawUsageField.USAGE_AMOUNT, "value": row[RawUsageField.USAGE_AMOUNT]},
            )

        usage = normalize_usage(service_name, usage_type, row[RawUsageField.USAGE_UNIT], usage_amount)
        instance_type = resolve_instance_type(usage_type)

        line = UsageLine(
            service_name=service_name,
            usage_type=usage_type,
            usage_amount=usage.amount,
            reported_vcpus=_parse_optional_float(row.get(RawUsageField.VCPUS)),
        )

        try:
            return NormalizedUsageRecord(
                cloud_provider=self.cloud_provider,
                account_id=account_id,
                account_name=self.accounts.resolve_name(account_id) or account_id,
                service_name=service_name,
                usage_type=usage_type,
                region=region,
                usage_amount=usage.amount,
                usage_unit=usage.unit,
                vcpu_hours=self.estimator.estimate_vcpu_hours(line),
                gpu_hours=self.estimator.estimate_gpu_hours(line),
                instance_type=instance_type,
                replication_factor=resolve_replication_factor(service_name, usage_type, region),
                cost=_parse_float(row, RawUsageField.COST),
                timestamp=_parse_timestamp(row),
                tags={},
                compute_processors=classify_compute(service_name, instance_type),
                gpu_processors=classify_gpu(service_name, instance_type),
            )
        except ValidationError as e:
            raise UsageRowError(
                "Usage row produced an invalid record",
                details={"errors": e.errors(include_url=False)},
            )


@dataclass
class RowFailure:
    index: int
    error: UsageRowError


@dataclass
class NormalizationResult:
    records: List[NormalizedUsageRecord] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)


def normalize_rows(
    rows: Iterable[RawUsageRow],
    assembler: Optional[UsageRecordAssembler] = None,
) -> NormalizationResult:
    """
    Normalize a batch of rows. Contract violations are logged and collected
    per row instead of aborting the batch.
    """
    assembler = assembler or UsageRecordAssembler()
    result = NormalizationResult()

    for index, row in enumerate(rows):
        try:
            result.records.append(assembler.build(row))
        except UsageRowError as e:
            logger.warning(
                "usage_row_rejected",
                row_index=index,
                error=e.message,
                details=e.details,
            )
            result.failures.append(RowFailure(index=index, error=e))

    logger.info(
        "usage_rows_normalized",
        normalized=len(result.records),
        rejected=len(result.failures),
        tables_version=TABLES_VERSION,
    )
    return result
