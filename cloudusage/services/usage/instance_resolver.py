"""
Instance Type Resolver

Extracts the instance type token (e.g. "m5.xlarge") from a CUR usage type
such as "USE1-BoxUsage:m5.xlarge" or "InstanceUsage:db.r5.large".

Two extraction strategies are kept apart on purpose:
- resolve_instance_type() feeds the record's instance_type field and the
  processor mappings.
- extract_instance_type_from_usage_type() is stricter and feeds the vCPU/GPU
  lookups (burstable baselines and broker sizes depend on its output).
"""

import re

# Checked in order, first contained marker wins
MANAGED_SERVICE_MARKERS = ("db", "cache", "Kafka")

_MANAGED_PREFIX_PATTERN = re.compile(r"^((db|cache|dax|dms|ml|mq|KernelGateway-ml|.+Kafka)\.)")


def correct_usage_type_suffix(usage_type: str) -> str:
    """
    CUR sometimes truncates xlarge sizes to 'xl' (e.g. "BoxUsage:m5.xl").
    Returns the usage type with 'arge' appended in that case.
    """
    if usage_type.endswith("xl"):
        return usage_type + "arge"
    return usage_type


def resolve_instance_type(usage_type: str) -> str:
    """
    Returns the instance type token for a usage type, without the managed
    service prefix. Falls back to the input when nothing can be stripped.
    """
    usage_type = correct_usage_type_suffix(usage_type)

    marker = next((m for m in MANAGED_SERVICE_MARKERS if m in usage_type), None)
    if marker:
        return usage_type.split(f"{marker}.")[-1]
    return usage_type.split(":")[-1]


def extract_instance_type_from_usage_type(usage_type: str) -> str:
    """Trailing ':' segment with one managed-service prefix (db., cache., ...Kafka.) removed."""
    return _MANAGED_PREFIX_PATTERN.sub("", usage_type.split(":")[-1], count=1)
