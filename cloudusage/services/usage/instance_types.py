"""
AWS Instance Knowledge Base

Static lookup tables used to turn CUR usage types into compute usage:
- EC2 family -> size -> vCPUs (also used for RDS, ElastiCache, SageMaker, ...)
- instance type -> GPU count
- burstable instance -> baseline CPU utilization per vCPU
- MSK broker size -> vCPUs
- Redshift node -> vCPU-seconds per node-hour

Sources:
- AWS EC2 instance type documentation (vCPU and accelerator counts)
- AWS burstable performance instance baseline table
- Cloud Carbon Footprint (CCF) open source project

Tables are built once at import and exposed read-only.
"""

from types import MappingProxyType
from typing import Any, Mapping

TABLES_VERSION = "aws-2023.06"


def _frozen(table: dict) -> Mapping[str, Any]:
    return MappingProxyType(
        {key: _frozen(value) if isinstance(value, dict) else value for key, value in table.items()}
    )


# Size ladders shared by several families (size -> vCPUs)
_GRAVITON_SIZES = {
    "medium": 1, "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16,
    "8xlarge": 32, "12xlarge": 48, "16xlarge": 64, "metal": 64,
}
_INTEL_GEN5_SIZES = {
    "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32,
    "12xlarge": 48, "16xlarge": 64, "24xlarge": 96, "metal": 96,
}
_INTEL_GEN6_SIZES = {
    "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32,
    "12xlarge": 48, "16xlarge": 64, "24xlarge": 96, "32xlarge": 128, "metal": 128,
}
_AMD_GEN6_SIZES = {
    "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32,
    "12xlarge": 48, "16xlarge": 64, "24xlarge": 96, "32xlarge": 128,
    "48xlarge": 192, "metal": 192,
}
_C5_SIZES = {
    "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "9xlarge": 36,
    "12xlarge": 48, "18xlarge": 72, "24xlarge": 96, "metal": 96,
}
_T3_SIZES = {
    "nano": 2, "micro": 2, "small": 2, "medium": 2, "large": 2,
    "xlarge": 4, "2xlarge": 8,
}
_NO_METAL_GEN5_SIZES = {size: vcpus for size, vcpus in _INTEL_GEN5_SIZES.items() if size != "metal"}
_NO_METAL_GRAVITON_SIZES = {size: vcpus for size, vcpus in _GRAVITON_SIZES.items() if size != "metal"}
_C5A_SIZES = {
    "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32,
    "12xlarge": 48, "16xlarge": 64, "24xlarge": 96,
}


EC2_INSTANCE_TYPES = _frozen({
    # General Purpose
    "a1": {"medium": 1, "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "metal": 16},
    "m1": {"small": 1, "medium": 1, "large": 2, "xlarge": 4},
    "m3": {"medium": 1, "large": 2, "xlarge": 4, "2xlarge": 8},
    "m4": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "10xlarge": 40, "16xlarge": 64},
    "m5": _INTEL_GEN5_SIZES,
    "m5d": _INTEL_GEN5_SIZES,
    "m5n": _INTEL_GEN5_SIZES,
    "m5dn": _INTEL_GEN5_SIZES,
    "m5a": _NO_METAL_GEN5_SIZES,
    "m5ad": _NO_METAL_GEN5_SIZES,
    "m5zn": {"large": 2, "xlarge": 4, "2xlarge": 8, "3xlarge": 12, "6xlarge": 24, "12xlarge": 48, "metal": 48},
    "m6g": _GRAVITON_SIZES,
    "m6gd": _GRAVITON_SIZES,
    "m6i": _INTEL_GEN6_SIZES,
    "m6id": _INTEL_GEN6_SIZES,
    "m6in": _INTEL_GEN6_SIZES,
    "m6idn": _INTEL_GEN6_SIZES,
    "m6a": _AMD_GEN6_SIZES,
    "m7g": _GRAVITON_SIZES,

    # Burstable
    "t1": {"micro": 1},
    "t2": {"nano": 1, "micro": 1, "small": 1, "medium": 2, "large": 2, "xlarge": 4, "2xlarge": 8},
    "t3": _T3_SIZES,
    "t3a": _T3_SIZES,
    "t4g": _T3_SIZES,

    # Compute Optimized
    "c1": {"medium": 2, "xlarge": 8},
    "c3": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32},
    "c4": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 36},
    "c5": _C5_SIZES,
    "c5d": _C5_SIZES,
    "c5a": _C5A_SIZES,
    "c5ad": _C5A_SIZES,
    "c5n": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "9xlarge": 36, "18xlarge": 72, "metal": 72},
    "c6g": _GRAVITON_SIZES,
    "c6gd": _GRAVITON_SIZES,
    "c6gn": _NO_METAL_GRAVITON_SIZES,
    "c6i": _INTEL_GEN6_SIZES,
    "c6id": _INTEL_GEN6_SIZES,
    "c6in": _INTEL_GEN6_SIZES,
    "c6a": _AMD_GEN6_SIZES,
    "c7g": _GRAVITON_SIZES,
    "c7gn": _NO_METAL_GRAVITON_SIZES,

    # Memory Optimized
    "m2": {"xlarge": 2, "2xlarge": 4, "4xlarge": 8},
    "cr1": {"8xlarge": 32},
    "r3": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32},
    "r4": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64},
    "r5": _INTEL_GEN5_SIZES,
    "r5d": _INTEL_GEN5_SIZES,
    "r5n": _INTEL_GEN5_SIZES,
    "r5dn": _INTEL_GEN5_SIZES,
    "r5b": _INTEL_GEN5_SIZES,
    "r5a": _NO_METAL_GEN5_SIZES,
    "r5ad": _NO_METAL_GEN5_SIZES,
    "r6g": _GRAVITON_SIZES,
    "r6gd": _GRAVITON_SIZES,
    "r6i": _INTEL_GEN6_SIZES,
    "r6id": _INTEL_GEN6_SIZES,
    "r6in": _INTEL_GEN6_SIZES,
    "r6idn": _INTEL_GEN6_SIZES,
    "r6a": _AMD_GEN6_SIZES,
    "r7g": _GRAVITON_SIZES,
    "x1": {"16xlarge": 64, "32xlarge": 128},
    "x1e": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64, "32xlarge": 128},
    # RDS only offers x2g; EC2 offers x2gd
    "x2g": _NO_METAL_GRAVITON_SIZES,
    "x2gd": _GRAVITON_SIZES,
    "x2idn": {"16xlarge": 64, "24xlarge": 96, "32xlarge": 128, "metal": 128},
    "x2iedn": {
        "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64,
        "24xlarge": 96, "32xlarge": 128, "metal": 128,
    },
    "x2iezn": {"2xlarge": 8, "4xlarge": 16, "6xlarge": 24, "8xlarge": 32, "12xlarge": 48, "metal": 48},
    "z1d": {"large": 2, "xlarge": 4, "2xlarge": 8, "3xlarge": 12, "6xlarge": 24, "12xlarge": 48, "metal": 48},

    # Storage Optimized
    "d2": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 36},
    "d3": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32},
    "d3en": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "6xlarge": 24, "8xlarge": 32, "12xlarge": 48},
    "h1": {"2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64},
    "i2": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32},
    "i3": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64, "metal": 72},
    "i3en": {
        "large": 2, "xlarge": 4, "2xlarge": 8, "3xlarge": 12, "6xlarge": 24,
        "12xlarge": 48, "24xlarge": 96, "metal": 96,
    },
    "i4i": {
        "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32,
        "16xlarge": 64, "32xlarge": 128, "metal": 128,
    },
    "i4g": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64},
    "im4gn": {"large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64},
    "is4gen": {"medium": 1, "large": 2, "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32},

    # Accelerated Computing
    "p2": {"xlarge": 4, "8xlarge": 32, "16xlarge": 64},
    "p3": {"2xlarge": 8, "8xlarge": 32, "16xlarge": 64},
    "p3dn": {"24xlarge": 96},
    "p4d": {"24xlarge": 96},
    "p4de": {"24xlarge": 96},
    "g3": {"4xlarge": 16, "8xlarge": 32, "16xlarge": 64},
    "g3s": {"xlarge": 4},
    "g4dn": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "12xlarge": 48, "16xlarge": 64, "metal": 96},
    "g4ad": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64},
    "g5": {
        "xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "12xlarge": 48,
        "16xlarge": 64, "24xlarge": 96, "48xlarge": 192,
    },
    "g5g": {"xlarge": 4, "2xlarge": 8, "4xlarge": 16, "8xlarge": 32, "16xlarge": 64, "metal": 64},
    "f1": {"2xlarge": 8, "4xlarge": 16, "16xlarge": 64},
    "inf1": {"xlarge": 4, "2xlarge": 8, "6xlarge": 24, "24xlarge": 96},
    "inf2": {"xlarge": 4, "8xlarge": 32, "24xlarge": 96, "48xlarge": 192},
    "trn1": {"2xlarge": 8, "32xlarge": 128},
    "trn1n": {"32xlarge": 128},
})

# Instance type -> number of GPUs attached
GPU_INSTANCES_TYPES = _frozen({
    "p2.xlarge": 1,
    "p2.8xlarge": 8,
    "p2.16xlarge": 16,
    "p3.2xlarge": 1,
    "p3.8xlarge": 4,
    "p3.16xlarge": 8,
    "p3dn.24xlarge": 8,
    "p4d.24xlarge": 8,
    "p4de.24xlarge": 8,
    "g3s.xlarge": 1,
    "g3.4xlarge": 1,
    "g3.8xlarge": 2,
    "g3.16xlarge": 4,
    "g4dn.xlarge": 1,
    "g4dn.2xlarge": 1,
    "g4dn.4xlarge": 1,
    "g4dn.8xlarge": 1,
    "g4dn.16xlarge": 1,
    "g4dn.12xlarge": 4,
    "g4dn.metal": 8,
    "g4ad.xlarge": 1,
    "g4ad.2xlarge": 1,
    "g4ad.4xlarge": 1,
    "g4ad.8xlarge": 2,
    "g4ad.16xlarge": 4,
    "g5.xlarge": 1,
    "g5.2xlarge": 1,
    "g5.4xlarge": 1,
    "g5.8xlarge": 1,
    "g5.16xlarge": 1,
    "g5.12xlarge": 4,
    "g5.24xlarge": 4,
    "g5.48xlarge": 8,
    "g5g.xlarge": 1,
    "g5g.2xlarge": 1,
    "g5g.4xlarge": 1,
    "g5g.8xlarge": 1,
    "g5g.16xlarge": 2,
    "g5g.metal": 2,
})

# Baseline utilization per vCPU a burstable instance earns credits for
BURSTABLE_INSTANCE_BASELINE_UTILIZATION = _frozen({
    "t2.nano": 0.05,
    "t2.micro": 0.1,
    "t2.small": 0.2,
    "t2.medium": 0.2,
    "t2.large": 0.3,
    "t2.xlarge": 0.225,
    "t2.2xlarge": 0.16875,
    "t3.nano": 0.05,
    "t3.micro": 0.1,
    "t3.small": 0.2,
    "t3.medium": 0.2,
    "t3.large": 0.3,
    "t3.xlarge": 0.4,
    "t3.2xlarge": 0.4,
    "t3a.nano": 0.05,
    "t3a.micro": 0.1,
    "t3a.small": 0.2,
    "t3a.medium": 0.2,
    "t3a.large": 0.3,
    "t3a.xlarge": 0.4,
    "t3a.2xlarge": 0.4,
    "t4g.nano": 0.05,
    "t4g.micro": 0.1,
    "t4g.small": 0.2,
    "t4g.medium": 0.2,
    "t4g.large": 0.3,
    "t4g.xlarge": 0.4,
    "t4g.2xlarge": 0.4,
})

# MSK broker size -> vCPUs. Keys keep the "Kafka" marker as it appears in the usage type.
MSK_INSTANCE_TYPES = _frozen({
    "Kafka.t3.small": 2,
    **{f"Kafka.m5.{size}": vcpus for size, vcpus in _NO_METAL_GEN5_SIZES.items()},
    **{f"Kafka.m7g.{size}": vcpus for size, vcpus in _GRAVITON_SIZES.items() if size not in ("medium", "metal")},
})

# Redshift node family -> size -> vCPU-seconds per node-hour
REDSHIFT_INSTANCE_TYPES = _frozen({
    "dc2": {"large": 2 * 3600, "8xlarge": 32 * 3600},
    "ds2": {"xlarge": 4 * 3600, "8xlarge": 36 * 3600},
    "ra3": {"xlplus": 4 * 3600, "4xlarge": 12 * 3600, "16xlarge": 48 * 3600},
})
