import pytest

from cloudusage.services.usage.instance_types import EC2_INSTANCE_TYPES, GPU_INSTANCES_TYPES
from cloudusage.services.usage.processors import (
    INSTANCE_TYPE_COMPUTE_PROCESSOR_MAPPING,
    INSTANCE_TYPE_GPU_PROCESSOR_MAPPING,
    ComputeProcessor,
    classify_compute,
    classify_gpu,
)

UNKNOWN = ComputeProcessor.UNKNOWN.value


class TestComputeClassification:

    def test_known_instance_type(self):
        assert classify_compute("AmazonEC2", "m5.large") == ["Skylake", "Cascade Lake"]

    def test_graviton_instance_type(self):
        assert classify_compute("AmazonEC2", "m6g.xlarge") == ["AWS Graviton2"]

    @pytest.mark.parametrize("instance_type,processors", [
        ("x2gd.xlarge", ["AWS Graviton2"]),
        ("x2iedn.xlarge", ["Ice Lake"]),
        ("trn1.2xlarge", ["Ice Lake"]),
        ("cr1.8xlarge", ["Sandy Bridge"]),
        ("m1.small", [UNKNOWN]),
    ])
    def test_storage_memory_and_legacy_families(self, instance_type, processors):
        assert classify_compute("AmazonEC2", instance_type) == processors

    def test_unknown_instance_type(self):
        assert classify_compute("AmazonEC2", "zz9.large") == [UNKNOWN]

    def test_lambda_arm(self):
        assert classify_compute("AWSLambda", "USE1-Lambda-GB-Second-ARM") == ["AWS Graviton2"]

    def test_lambda_x86_is_unknown(self):
        assert classify_compute("AWSLambda", "USE1-Lambda-GB-Second") == [UNKNOWN]

    def test_every_ec2_entry_is_classified(self):
        for family, sizes in EC2_INSTANCE_TYPES.items():
            for size in sizes:
                assert f"{family}.{size}" in INSTANCE_TYPE_COMPUTE_PROCESSOR_MAPPING


class TestGpuClassification:

    def test_gpu_instance(self):
        assert classify_gpu("AmazonEC2", "p3.2xlarge") == ["NVIDIA Tesla V100"]

    def test_graviton_gpu_instance(self):
        assert classify_gpu("AmazonEC2", "g5g.xlarge") == ["NVIDIA T4G"]

    def test_cpu_only_instance(self):
        assert classify_gpu("AmazonEC2", "m5.large") == [UNKNOWN]

    def test_lambda_never_reports_gpu(self):
        assert classify_gpu("AWSLambda", "USE1-Lambda-GB-Second-ARM") == [UNKNOWN]

    def test_every_gpu_entry_is_classified(self):
        assert set(INSTANCE_TYPE_GPU_PROCESSOR_MAPPING) == set(GPU_INSTANCES_TYPES)


@pytest.mark.parametrize("service", ["AmazonEC2", "AWSLambda", "AmazonRDS", ""])
@pytest.mark.parametrize("instance_type", ["", "m5.large", "p4d.24xlarge", "garbage", "Requests-Tier1"])
def test_classification_never_empty(service, instance_type):
    assert classify_compute(service, instance_type)
    assert classify_gpu(service, instance_type)
