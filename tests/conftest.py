import os
# Keep tests independent of any local .env before cloudusage is imported
os.environ["TESTING"] = "True"
os.environ.pop("AWS_ACCOUNTS", None)
os.environ.pop("REFERENCE_CPU_UTILIZATION", None)
os.environ.pop("DEFAULT_REPLICATION_FACTOR", None)

import pytest

from cloudusage.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are an lru_cache singleton; clear it around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def raw_row():
    """A CUR row as returned by the usage query (all values are strings)."""
    return {
        "serviceName": "AmazonEC2",
        "usageType": "USE1-BoxUsage:m5.xlarge",
        "usageAmount": "2",
        "usageUnit": "Hrs",
        "cost": "0.384",
        "timestamp": "2023-03-01 00:00:00.000",
        "region": "us-east-1",
        "accountName": "123456789012",
        "vCpus": "",
    }
