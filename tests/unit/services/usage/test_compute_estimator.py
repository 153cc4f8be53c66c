"""
Tests for ComputeUsageEstimator.

Tests cover:
- per-service rules (Glue, SimpleDB) and their precedence
- Aurora Serverless, Fargate and CPU credit usage
- burstable instances scaled by baseline utilization
- table lookups (EC2, MSK brokers, Redshift nodes) and report-supplied vCPUs
- lookup misses resolving to 0, never NaN
"""
import math

import pytest

from cloudusage.core.exceptions import ConfigurationError
from cloudusage.services.usage.compute_estimator import ComputeUsageEstimator, UsageLine
from cloudusage.services.usage.instance_types import (
    BURSTABLE_INSTANCE_BASELINE_UTILIZATION,
    EC2_INSTANCE_TYPES,
)


@pytest.fixture
def estimator():
    return ComputeUsageEstimator()


class TestServiceRules:

    def test_glue_uses_four_vcpus_per_unit(self, estimator):
        usage = UsageLine("AWSGlue", "USE1-ETL-DPU-Hour:m5.24xlarge", 10, reported_vcpus=96)
        assert estimator.estimate_vcpu_hours(usage) == 40

    def test_simple_db_uses_one_vcpu_per_unit(self, estimator):
        usage = UsageLine("AmazonSimpleDB", "USE1-BoxUsage", 7.5)
        assert estimator.estimate_vcpu_hours(usage) == 7.5


class TestUsageTypeRules:

    def test_aurora_serverless_capacity_units(self, estimator):
        usage = UsageLine("AmazonRDS", "USE1-Aurora:ServerlessUsage", 8)
        assert estimator.estimate_vcpu_hours(usage) == 2

    @pytest.mark.parametrize("usage_type", [
        "USE1-Fargate-vCPU-Hours:perCPU",
        "USE1-CPUCredits:t3",
    ])
    def test_already_vcpu_hours(self, estimator, usage_type):
        usage = UsageLine("AmazonECS", usage_type, 3.25)
        assert estimator.estimate_vcpu_hours(usage) == 3.25

    def test_cpu_credits_take_precedence_over_burstable(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-CPUCredits:t3.micro", 5)
        assert estimator.estimate_vcpu_hours(usage) == 5


class TestBurstableInstances:

    def test_scaled_by_baseline_over_reference(self, estimator):
        # t3.large: 2 vCPUs, 30% baseline, 50% reference
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:t3.large", 1)
        assert estimator.estimate_vcpu_hours(usage) == pytest.approx(2 * 0.3 / 0.5)

    def test_degenerate_reference_equals_baseline(self):
        estimator = ComputeUsageEstimator(reference_utilization=0.10)
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:t3.micro", 1)
        assert EC2_INSTANCE_TYPES["t3"]["micro"] == 2
        assert BURSTABLE_INSTANCE_BASELINE_UTILIZATION["t3.micro"] == 0.10
        assert estimator.estimate_vcpu_hours(usage) == pytest.approx(2.0)

    def test_reference_from_settings(self, monkeypatch):
        monkeypatch.setenv("REFERENCE_CPU_UTILIZATION", "0.2")
        estimator = ComputeUsageEstimator()
        usage = UsageLine("AmazonEC2", "BoxUsage:t3.small", 4)
        assert estimator.estimate_vcpu_hours(usage) == pytest.approx(2 * (0.2 / 0.2) * 4)

    def test_managed_burstable_uses_stripped_type(self, estimator):
        usage = UsageLine("AmazonRDS", "USE1-InstanceUsage:db.t3.medium", 10)
        assert estimator.estimate_vcpu_hours(usage) == pytest.approx(2 * 0.2 / 0.5 * 10)

    def test_burstable_broker_uses_broker_table(self, estimator):
        usage = UsageLine("AmazonMSK", "USE1-Kafka.t3.small", 1)
        assert estimator.estimate_vcpu_hours(usage) == pytest.approx(2 * 0.2 / 0.5)

    def test_burstable_miss_is_zero(self, estimator):
        # Usage type mentions a burstable key but the extracted type is not in the tables
        usage = UsageLine("AmazonEC2", "USE1-HostUsage:t3.micro-dedicated", 1)
        assert estimator.estimate_vcpu_hours(usage) == 0


class TestTableLookups:

    def test_every_non_burstable_ec2_entry_matches_table(self, estimator):
        for family, sizes in EC2_INSTANCE_TYPES.items():
            for size, vcpus in sizes.items():
                usage_type = f"USE1-BoxUsage:{family}.{size}"
                if any(key in usage_type for key in BURSTABLE_INSTANCE_BASELINE_UTILIZATION):
                    continue
                usage = UsageLine("AmazonEC2", usage_type, 1)
                assert estimator.estimate_vcpu_hours(usage) == vcpus, usage_type

    def test_amount_multiplies_table_value(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:m5.xlarge", 24)
        assert estimator.estimate_vcpu_hours(usage) == 96

    def test_reported_vcpus_used_when_present(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:m5.xlarge", 2, reported_vcpus=6)
        assert estimator.estimate_vcpu_hours(usage) == 12

    def test_zero_reported_vcpus_falls_back_to_table(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:m5.xlarge", 2, reported_vcpus=0)
        assert estimator.estimate_vcpu_hours(usage) == 8

    def test_msk_broker_size(self, estimator):
        usage = UsageLine("AmazonMSK", "USE1-Kafka.m5.2xlarge", 3)
        assert estimator.estimate_vcpu_hours(usage) == 24

    def test_redshift_node_converted_from_vcpu_seconds(self, estimator):
        usage = UsageLine("AmazonRedshift", "USE1-Node:ra3.4xlarge", 2)
        assert estimator.estimate_vcpu_hours(usage) == pytest.approx(24)

    @pytest.mark.parametrize("usage_type,vcpus", [
        ("USE1-BoxUsage:r6a.large", 2),
        ("USE1-BoxUsage:m6id.large", 2),
        ("USE1-BoxUsage:c6id.xlarge", 4),
        ("USE1-BoxUsage:c6in.large", 2),
        ("USE1-BoxUsage:i4i.large", 2),
        ("USE1-BoxUsage:x2iedn.2xlarge", 8),
        ("USE1-BoxUsage:is4gen.medium", 1),
        ("USE1-BoxUsage:inf2.xlarge", 4),
        ("USE1-BoxUsage:trn1.32xlarge", 128),
        ("USE1-BoxUsage:h1.2xlarge", 8),
        ("USE1-BoxUsage:f1.2xlarge", 8),
        ("USE1-BoxUsage:t1.micro", 1),
        ("USE1-BoxUsage:m1.small", 1),
        ("USE1-BoxUsage:cr1.8xlarge", 32),
        ("USE1-InstanceUsage:db.x2g.large", 2),
    ])
    def test_current_and_previous_generation_families(self, estimator, usage_type, vcpus):
        usage = UsageLine("AmazonEC2", usage_type, 3)
        assert estimator.estimate_vcpu_hours(usage) == vcpus * 3

    @pytest.mark.parametrize("service,usage_type", [
        ("AmazonEC2", "USE1-BoxUsage:zz9.large"),
        ("AmazonEC2", "USE1-BoxUsage:m5.huge"),
        ("AmazonEC2", "USE1-DataTransfer-Out-Bytes"),
        ("AmazonMSK", "USE1-Kafka.x9.large"),
        ("AmazonRedshift", "USE1-RMS:ServerlessUsage"),
    ])
    def test_lookup_miss_is_zero_not_nan(self, estimator, service, usage_type):
        hours = estimator.estimate_vcpu_hours(UsageLine(service, usage_type, 5))
        assert hours == 0
        assert not math.isnan(hours)


class TestGpuHours:

    def test_gpu_count_times_amount(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:p3.8xlarge", 2)
        assert estimator.estimate_gpu_hours(usage) == 8

    def test_managed_gpu_instance(self, estimator):
        usage = UsageLine("AmazonSageMaker", "USE1-Studio:KernelGateway-ml.g4dn.xlarge", 3)
        assert estimator.estimate_gpu_hours(usage) == 3

    def test_graviton_gpu_instance(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:g5g.16xlarge", 1)
        assert estimator.estimate_gpu_hours(usage) == 2

    def test_inference_accelerators_are_not_gpus(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:inf2.48xlarge", 1)
        assert estimator.estimate_gpu_hours(usage) == 0

    def test_no_gpu_is_zero(self, estimator):
        usage = UsageLine("AmazonEC2", "USE1-BoxUsage:m5.large", 10)
        assert estimator.estimate_gpu_hours(usage) == 0


class TestConfiguration:

    @pytest.mark.parametrize("reference", [0, -0.5, 1.5])
    def test_invalid_reference_rejected(self, reference):
        with pytest.raises(ConfigurationError):
            ComputeUsageEstimator(reference_utilization=reference)
