"""
Compute Usage Estimator

Derives vCPU-hours and GPU-hours for one CUR line item.

The vCPU rules form an ordered cascade (first match wins) because a usage
type can satisfy several patterns at once, e.g. "USE1-Kafka.t3.small" is both
a broker and a burstable instance:

1. Per-service rules (SERVICE_VCPU_RULES): Glue, SimpleDB
2. Aurora Serverless capacity units
3. Fargate vCPU-hours and CPU credits (already vCPU-hours)
4. Burstable instances, scaled by baseline utilization
5. Instance table lookup when the report has no vCPU count
6. vCPU count reported by the CUR row

Lookup misses yield 0 hours, never NaN.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import structlog

from cloudusage.core.config import get_settings
from cloudusage.core.exceptions import ConfigurationError
from cloudusage.services.usage.instance_resolver import extract_instance_type_from_usage_type
from cloudusage.services.usage.instance_types import (
    BURSTABLE_INSTANCE_BASELINE_UTILIZATION,
    EC2_INSTANCE_TYPES,
    GPU_INSTANCES_TYPES,
    MSK_INSTANCE_TYPES,
    REDSHIFT_INSTANCE_TYPES,
)
from cloudusage.services.usage.units import SECONDS_PER_HOUR

logger = structlog.get_logger()

# AWS documents 4 vCPUs per Glue data processing unit
GLUE_VCPUS_PER_USAGE = 4
SIMPLE_DB_VCPUS_PER_USAGE = 1
# Aurora Serverless capacity units per vCPU
AURORA_CAPACITY_UNITS_PER_VCPU = 4

VCPU_HOUR_USAGE_MARKERS = ("Fargate-vCPU-Hours", "CPUCredits")


@dataclass(frozen=True)
class UsageLine:
    """The parts of a billing row the estimator reads, after unit normalization."""
    service_name: str
    usage_type: str
    usage_amount: float
    reported_vcpus: Optional[float] = None


def _glue_vcpu_hours(usage: UsageLine) -> float:
    return GLUE_VCPUS_PER_USAGE * usage.usage_amount


def _simple_db_vcpu_hours(usage: UsageLine) -> float:
    return SIMPLE_DB_VCPUS_PER_USAGE * usage.usage_amount


SERVICE_VCPU_RULES: Dict[str, Callable[[UsageLine], float]] = {
    "AWSGlue": _glue_vcpu_hours,
    "AmazonSimpleDB": _simple_db_vcpu_hours,
}


def _burstable_key(usage_type: str) -> Optional[str]:
    return next(
        (key for key in BURSTABLE_INSTANCE_BASELINE_UTILIZATION if key in usage_type),
        None,
    )


class ComputeUsageEstimator:
    """
    Estimates vCPU-hours and GPU-hours from usage amount, service and
    instance type. Stateless apart from the reference utilization, so one
    instance can be shared across rows and threads.
    """

    def __init__(self, reference_utilization: Optional[float] = None):
        if reference_utilization is None:
            reference_utilization = get_settings().REFERENCE_CPU_UTILIZATION
        if not 0 < reference_utilization <= 1:
            raise ConfigurationError(
                "Reference CPU utilization must be in (0, 1]",
                details={"reference_utilization": reference_utilization},
            )
        self.reference_utilization = reference_utilization

    def estimate_vcpu_hours(self, usage: UsageLine) -> float:
        service_rule = SERVICE_VCPU_RULES.get(usage.service_name)
        if service_rule:
            return service_rule(usage)

        if "Aurora:ServerlessUsage" in usage.usage_type:
            return usage.usage_amount / AURORA_CAPACITY_UNITS_PER_VCPU
        if any(marker in usage.usage_type for marker in VCPU_HOUR_USAGE_MARKERS):
            return usage.usage_amount

        instance_type = extract_instance_type_from_usage_type(usage.usage_type)

        if _burstable_key(usage.usage_type):
            family_and_size = ".".join(instance_type.split(".")[:2])
            return self.burstable_vcpus(usage, family_and_size) * usage.usage_amount

        if not usage.reported_vcpus:
            vcpus = self.vcpus_for_instance_type(usage, instance_type)
            if vcpus is None:
                logger.debug(
                    "vcpu_lookup_miss",
                    service=usage.service_name,
                    usage_type=usage.usage_type,
                    instance_type=instance_type,
                )
                return 0.0
            return vcpus * usage.usage_amount

        return usage.reported_vcpus * usage.usage_amount

    def burstable_vcpus(self, usage: UsageLine, instance_type: str) -> float:
        """
        Effective vCPUs of a burstable instance: table vCPUs scaled by the
        guaranteed baseline relative to the reference utilization.
        """
        vcpus = self.vcpus_for_instance_type(usage, instance_type)
        baseline = BURSTABLE_INSTANCE_BASELINE_UTILIZATION.get(instance_type)
        if vcpus is None or baseline is None:
            logger.debug("burstable_lookup_miss", usage_type=usage.usage_type, instance_type=instance_type)
            return 0.0
        return vcpus * (baseline / self.reference_utilization)

    def vcpus_for_instance_type(self, usage: UsageLine, instance_type: str) -> Optional[float]:
        """vCPU count for an instance type, or None when no table knows it."""
        family, size = (instance_type.split(".") + [""])[:2]
        if "Kafka" in usage.usage_type:
            return MSK_INSTANCE_TYPES.get("Kafka" + usage.usage_type.split("Kafka")[-1])
        if usage.service_name == "AmazonRedshift":
            vcpu_seconds = REDSHIFT_INSTANCE_TYPES.get(family, {}).get(size)
            return None if vcpu_seconds is None else vcpu_seconds / SECONDS_PER_HOUR
        return EC2_INSTANCE_TYPES.get(family, {}).get(size)

    def estimate_gpu_hours(self, usage: UsageLine) -> float:
        instance_type = extract_instance_type_from_usage_type(usage.usage_type)
        gpus = GPU_INSTANCES_TYPES.get(instance_type)
        if gpus is None:
            return 0.0
        return gpus * usage.usage_amount
