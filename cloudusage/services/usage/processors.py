"""
Processor Classifier

Maps a resolved instance type to the CPU and GPU micro-architectures it runs
on, for downstream energy-per-architecture modeling. Classification is never
empty: unrecognized instance types map to [UNKNOWN].
"""

from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Tuple

from cloudusage.services.usage.instance_types import EC2_INSTANCE_TYPES, GPU_INSTANCES_TYPES


class ComputeProcessor(str, Enum):
    SANDY_BRIDGE = "Sandy Bridge"
    IVY_BRIDGE = "Ivy Bridge"
    HASWELL = "Haswell"
    BROADWELL = "Broadwell"
    SKYLAKE = "Skylake"
    CASCADE_LAKE = "Cascade Lake"
    ICE_LAKE = "Ice Lake"
    AMD_EPYC_1ST_GEN = "AMD EPYC 1st Gen"
    AMD_EPYC_2ND_GEN = "AMD EPYC 2nd Gen"
    AMD_EPYC_3RD_GEN = "AMD EPYC 3rd Gen"
    AWS_GRAVITON = "AWS Graviton"
    AWS_GRAVITON_2 = "AWS Graviton2"
    AWS_GRAVITON_3 = "AWS Graviton3"
    NVIDIA_K80 = "NVIDIA Tesla K80"
    NVIDIA_TESLA_M60 = "NVIDIA Tesla M60"
    NVIDIA_TESLA_T4 = "NVIDIA Tesla T4"
    NVIDIA_TESLA_V100 = "NVIDIA Tesla V100"
    NVIDIA_A10G = "NVIDIA A10G"
    NVIDIA_A100 = "NVIDIA A100"
    NVIDIA_T4G = "NVIDIA T4G"
    AMD_RADEON_PRO_V520 = "AMD Radeon Pro V520"
    UNKNOWN = "unknown"


P = ComputeProcessor

# Family -> processors. Expanded to every size known to EC2_INSTANCE_TYPES below.
# AWS documents only "Intel Xeon Family" for t1, m1, m2 and c1.
_FAMILY_COMPUTE_PROCESSORS = {
    "a1": [P.AWS_GRAVITON],
    "m1": [P.UNKNOWN],
    "m3": [P.IVY_BRIDGE, P.SANDY_BRIDGE],
    "m4": [P.BROADWELL, P.HASWELL],
    "m5": [P.SKYLAKE, P.CASCADE_LAKE],
    "m5d": [P.SKYLAKE, P.CASCADE_LAKE],
    "m5n": [P.CASCADE_LAKE],
    "m5dn": [P.CASCADE_LAKE],
    "m5a": [P.AMD_EPYC_1ST_GEN],
    "m5ad": [P.AMD_EPYC_1ST_GEN],
    "m5zn": [P.CASCADE_LAKE],
    "m6g": [P.AWS_GRAVITON_2],
    "m6gd": [P.AWS_GRAVITON_2],
    "m6i": [P.ICE_LAKE],
    "m6id": [P.ICE_LAKE],
    "m6in": [P.ICE_LAKE],
    "m6idn": [P.ICE_LAKE],
    "m6a": [P.AMD_EPYC_3RD_GEN],
    "m7g": [P.AWS_GRAVITON_3],
    "t1": [P.UNKNOWN],
    "t2": [P.HASWELL, P.BROADWELL],
    "t3": [P.SKYLAKE, P.CASCADE_LAKE],
    "t3a": [P.AMD_EPYC_1ST_GEN],
    "t4g": [P.AWS_GRAVITON_2],
    "c1": [P.UNKNOWN],
    "c3": [P.IVY_BRIDGE],
    "c4": [P.HASWELL],
    "c5": [P.SKYLAKE, P.CASCADE_LAKE],
    "c5d": [P.SKYLAKE, P.CASCADE_LAKE],
    "c5a": [P.AMD_EPYC_2ND_GEN],
    "c5ad": [P.AMD_EPYC_2ND_GEN],
    "c5n": [P.SKYLAKE],
    "c6g": [P.AWS_GRAVITON_2],
    "c6gd": [P.AWS_GRAVITON_2],
    "c6gn": [P.AWS_GRAVITON_2],
    "c6i": [P.ICE_LAKE],
    "c6id": [P.ICE_LAKE],
    "c6in": [P.ICE_LAKE],
    "c6a": [P.AMD_EPYC_3RD_GEN],
    "c7g": [P.AWS_GRAVITON_3],
    "c7gn": [P.AWS_GRAVITON_3],
    "m2": [P.UNKNOWN],
    "cr1": [P.SANDY_BRIDGE],
    "r3": [P.IVY_BRIDGE],
    "r4": [P.BROADWELL],
    "r5": [P.SKYLAKE, P.CASCADE_LAKE],
    "r5d": [P.SKYLAKE, P.CASCADE_LAKE],
    "r5n": [P.CASCADE_LAKE],
    "r5dn": [P.CASCADE_LAKE],
    "r5b": [P.CASCADE_LAKE],
    "r5a": [P.AMD_EPYC_1ST_GEN],
    "r5ad": [P.AMD_EPYC_1ST_GEN],
    "r6g": [P.AWS_GRAVITON_2],
    "r6gd": [P.AWS_GRAVITON_2],
    "r6i": [P.ICE_LAKE],
    "r6id": [P.ICE_LAKE],
    "r6in": [P.ICE_LAKE],
    "r6idn": [P.ICE_LAKE],
    "r6a": [P.AMD_EPYC_3RD_GEN],
    "r7g": [P.AWS_GRAVITON_3],
    "x1": [P.HASWELL],
    "x1e": [P.HASWELL],
    "x2g": [P.AWS_GRAVITON_2],
    "x2gd": [P.AWS_GRAVITON_2],
    "x2idn": [P.ICE_LAKE],
    "x2iedn": [P.ICE_LAKE],
    "x2iezn": [P.CASCADE_LAKE],
    "z1d": [P.SKYLAKE],
    "d2": [P.HASWELL],
    "d3": [P.CASCADE_LAKE],
    "d3en": [P.CASCADE_LAKE],
    "h1": [P.BROADWELL],
    "i2": [P.IVY_BRIDGE],
    "i3": [P.BROADWELL],
    "i3en": [P.SKYLAKE, P.CASCADE_LAKE],
    "i4i": [P.ICE_LAKE],
    "i4g": [P.AWS_GRAVITON_2],
    "im4gn": [P.AWS_GRAVITON_2],
    "is4gen": [P.AWS_GRAVITON_2],
    "p2": [P.BROADWELL],
    "p3": [P.BROADWELL],
    "p3dn": [P.SKYLAKE],
    "p4d": [P.CASCADE_LAKE],
    "p4de": [P.CASCADE_LAKE],
    "g3": [P.BROADWELL],
    "g3s": [P.BROADWELL],
    "g4dn": [P.CASCADE_LAKE],
    "g4ad": [P.AMD_EPYC_2ND_GEN],
    "g5": [P.AMD_EPYC_2ND_GEN],
    "g5g": [P.AWS_GRAVITON_2],
    "f1": [P.BROADWELL],
    "inf1": [P.CASCADE_LAKE],
    "inf2": [P.AMD_EPYC_3RD_GEN],
    "trn1": [P.ICE_LAKE],
    "trn1n": [P.ICE_LAKE],
}

_FAMILY_GPU_PROCESSORS = {
    "p2": [P.NVIDIA_K80],
    "p3": [P.NVIDIA_TESLA_V100],
    "p3dn": [P.NVIDIA_TESLA_V100],
    "p4d": [P.NVIDIA_A100],
    "p4de": [P.NVIDIA_A100],
    "g3": [P.NVIDIA_TESLA_M60],
    "g3s": [P.NVIDIA_TESLA_M60],
    "g4dn": [P.NVIDIA_TESLA_T4],
    "g4ad": [P.AMD_RADEON_PRO_V520],
    "g5": [P.NVIDIA_A10G],
    "g5g": [P.NVIDIA_T4G],
}

INSTANCE_TYPE_COMPUTE_PROCESSOR_MAPPING: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    f"{family}.{size}": tuple(p.value for p in processors)
    for family, processors in _FAMILY_COMPUTE_PROCESSORS.items()
    for size in EC2_INSTANCE_TYPES[family]
})

INSTANCE_TYPE_GPU_PROCESSOR_MAPPING: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    instance_type: tuple(p.value for p in _FAMILY_GPU_PROCESSORS[instance_type.split(".")[0]])
    for instance_type in GPU_INSTANCES_TYPES
})

SERVERLESS_FUNCTION_SERVICE = "AWSLambda"
ARM_USAGE_SUFFIX = "-ARM"


def classify_compute(service_name: str, instance_type: str) -> List[str]:
    """CPU architectures for an instance type. Lambda is classified by its '-ARM' suffix."""
    if service_name == SERVERLESS_FUNCTION_SERVICE:
        if instance_type.endswith(ARM_USAGE_SUFFIX):
            return [P.AWS_GRAVITON_2.value]
        return [P.UNKNOWN.value]

    processors = INSTANCE_TYPE_COMPUTE_PROCESSOR_MAPPING.get(instance_type)
    return list(processors) if processors else [P.UNKNOWN.value]


def classify_gpu(service_name: str, instance_type: str) -> List[str]:
    if service_name == SERVERLESS_FUNCTION_SERVICE:
        return [P.UNKNOWN.value]

    processors = INSTANCE_TYPE_GPU_PROCESSOR_MAPPING.get(instance_type)
    return list(processors) if processors else [P.UNKNOWN.value]
