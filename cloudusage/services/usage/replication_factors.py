"""
Replication Factor Resolver

Multiplier for redundant resource consumption that the usage amount does not
show, e.g. S3 objects stored across three availability zones.
Services without a rule use the configured default (1).
"""

from typing import Callable, Dict, Optional

from cloudusage.core.config import get_settings

S3_REPLICATION_FACTOR = 3
EBS_REPLICATION_FACTOR = 2
EFS_REPLICATION_FACTOR = 3
RDS_MULTI_AZ_REPLICATION_FACTOR = 2
# Aurora and DocumentDB keep six copies of the cluster volume across three AZs
CLUSTER_VOLUME_REPLICATION_FACTOR = 6
DYNAMO_DB_REPLICATION_FACTOR = 3
CLOUDWATCH_LOGS_REPLICATION_FACTOR = 3
SINGLE_ZONE_REPLICATION_FACTOR = 1

# Regions offering only two availability zones to new accounts
REGIONS_WITH_TWO_AZS = frozenset({"us-west-1"})

ONE_ZONE_STORAGE_MARKERS = ("ZIA", "OneZone", "-Z-IA")


def _cap_to_region_azs(factor: int, region: str) -> int:
    """Zonal replicas cannot exceed the number of AZs in the region."""
    if region in REGIONS_WITH_TWO_AZS:
        return min(factor, 2)
    return factor


def _s3(usage_type: str, region: str) -> Optional[int]:
    if any(marker in usage_type for marker in ONE_ZONE_STORAGE_MARKERS):
        return SINGLE_ZONE_REPLICATION_FACTOR
    return _cap_to_region_azs(S3_REPLICATION_FACTOR, region)


def _ec2(usage_type: str, region: str) -> Optional[int]:
    if "EBS:SnapshotUsage" in usage_type:
        return _s3(usage_type, region)
    if "EBS:VolumeUsage" in usage_type or "EBS:VolumeIOUsage" in usage_type:
        return EBS_REPLICATION_FACTOR
    return None


def _efs(usage_type: str, region: str) -> Optional[int]:
    if any(marker in usage_type for marker in ONE_ZONE_STORAGE_MARKERS):
        return SINGLE_ZONE_REPLICATION_FACTOR
    if "TimedStorage" in usage_type:
        return _cap_to_region_azs(EFS_REPLICATION_FACTOR, region)
    return None


def _rds(usage_type: str, region: str) -> Optional[int]:
    if "Aurora:StorageUsage" in usage_type or "Aurora:StorageIOUsage" in usage_type:
        return CLUSTER_VOLUME_REPLICATION_FACTOR
    if "Multi-AZ" in usage_type:
        return RDS_MULTI_AZ_REPLICATION_FACTOR
    return None


def _document_db(usage_type: str, region: str) -> Optional[int]:
    if "StorageUsage" in usage_type:
        return CLUSTER_VOLUME_REPLICATION_FACTOR
    return None


def _dynamo_db(usage_type: str, region: str) -> Optional[int]:
    return _cap_to_region_azs(DYNAMO_DB_REPLICATION_FACTOR, region)


def _cloudwatch(usage_type: str, region: str) -> Optional[int]:
    if "TimedStorage" in usage_type:
        return _cap_to_region_azs(CLOUDWATCH_LOGS_REPLICATION_FACTOR, region)
    return None


AWS_REPLICATION_FACTORS_FOR_SERVICES: Dict[str, Callable[[str, str], Optional[int]]] = {
    "AmazonS3": _s3,
    "AmazonGlacier": _s3,
    "AmazonEC2": _ec2,
    "AmazonEFS": _efs,
    "AmazonRDS": _rds,
    "AmazonDocDB": _document_db,
    "AmazonDynamoDB": _dynamo_db,
    "AmazonCloudWatch": _cloudwatch,
}


def default_replication_factor() -> float:
    return get_settings().DEFAULT_REPLICATION_FACTOR


def resolve_replication_factor(service_name: str, usage_type: str, region: str) -> float:
    """
    Service-specific factor when a rule exists and yields a usable value,
    otherwise the default. Always >= 1.
    """
    resolver = AWS_REPLICATION_FACTORS_FOR_SERVICES.get(service_name)
    factor = resolver(usage_type, region) if resolver else None
    if not factor or factor < 1:
        return default_replication_factor()
    return factor
