"""Distribution assembly and publishing."""

from src.distribution.assembler import (
    assemble_distribution,
    build_cache_behaviors,
    build_origin,
)
from src.distribution.publisher import DistributionPublisher, merge_distribution_config
from src.distribution.workflow import DistributionWorkflow

__all__ = [
    "DistributionPublisher",
    "DistributionWorkflow",
    "assemble_distribution",
    "build_cache_behaviors",
    "build_origin",
    "merge_distribution_config",
]
