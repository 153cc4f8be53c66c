"""
Cloud Usage Schemas - Normalization Layer
"""

from datetime import datetime
from typing import Dict, List, Mapping
from pydantic import BaseModel, ConfigDict, Field

# One billing row as handed over by the billing source: column alias -> raw string value
RawUsageRow = Mapping[str, str]


class RawUsageField:
    """Column aliases of the CUR usage query."""
    SERVICE_NAME = "serviceName"
    USAGE_TYPE = "usageType"
    USAGE_AMOUNT = "usageAmount"
    USAGE_UNIT = "usageUnit"
    COST = "cost"
    TIMESTAMP = "timestamp"
    REGION = "region"
    ACCOUNT = "accountName"
    VCPUS = "vCpus"

    REQUIRED = (
        SERVICE_NAME,
        USAGE_TYPE,
        USAGE_AMOUNT,
        USAGE_UNIT,
        COST,
        TIMESTAMP,
        REGION,
        ACCOUNT,
    )


class NormalizedUsageRecord(BaseModel):
    """Canonical resource usage for one billing row. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    cloud_provider: str = "AWS"
    account_id: str
    account_name: str
    service_name: str = Field(..., description="Provider product code, e.g. AmazonEC2")
    usage_type: str = Field(..., description="Usage type after suffix correction")
    region: str
    usage_amount: float = Field(..., description="Amount in usage_unit after unit conversion")
    usage_unit: str
    vcpu_hours: float = Field(..., ge=0)
    gpu_hours: float = Field(0.0, ge=0)
    instance_type: str
    replication_factor: float = Field(1.0, ge=1)
    cost: float
    timestamp: datetime
    tags: Dict[str, str] = Field(default_factory=dict)
    compute_processors: List[str] = Field(..., min_length=1)
    gpu_processors: List[str] = Field(..., min_length=1)
