import pytest
from pydantic import ValidationError

from cloudusage.core.config import Settings, get_settings


def test_defaults():
    """Defaults match the 2020 reference utilization and a neutral replication factor."""
    s = Settings()
    assert s.REFERENCE_CPU_UTILIZATION == 0.5
    assert s.DEFAULT_REPLICATION_FACTOR == 1.0
    assert s.CLOUD_PROVIDER == "AWS"
    assert s.AWS_ACCOUNTS == []


def test_reference_utilization_out_of_range_is_rejected():
    with pytest.raises(ValidationError, match="REFERENCE_CPU_UTILIZATION"):
        Settings(REFERENCE_CPU_UTILIZATION=0)
    with pytest.raises(ValidationError, match="REFERENCE_CPU_UTILIZATION"):
        Settings(REFERENCE_CPU_UTILIZATION=1.5)


def test_replication_factor_below_one_is_rejected():
    with pytest.raises(ValidationError, match="DEFAULT_REPLICATION_FACTOR"):
        Settings(DEFAULT_REPLICATION_FACTOR=0.5)


def test_accounts_parsed_from_environment(monkeypatch):
    """AWS_ACCOUNTS is read as JSON from the environment."""
    monkeypatch.setenv("AWS_ACCOUNTS", '[{"id": "123456789012", "name": "production"}]')
    s = get_settings()
    assert len(s.AWS_ACCOUNTS) == 1
    assert s.AWS_ACCOUNTS[0].id == "123456789012"
    assert s.AWS_ACCOUNTS[0].name == "production"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
