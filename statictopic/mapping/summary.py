"""
Baseline probes over per-broker mapping records.
"""

from typing import Iterable, List, Tuple

from statictopic.mapping.models import (
    TopicConfigAndQueueMapping,
    TopicQueueMappingDetail,
)


def find_max_epoch_and_queue_num(
    mapping_details: Iterable[TopicQueueMappingDetail],
) -> Tuple[int, int]:
    """
    Find the highest epoch and highest total queue count across records.
    
    The two maxima are taken independently and need not come from the
    same record. No validation is performed.
    
    Args:
        mapping_details: Per-broker mapping records
    
    Returns:
        (max_epoch, max_total_queues), or (-1, 0) for no records
    """
    epoch = -1
    queue_num = 0
    for detail in mapping_details:
        if detail.epoch > epoch:
            epoch = detail.epoch
        if detail.total_queues > queue_num:
            queue_num = detail.total_queues
    return epoch, queue_num


def get_mapping_detail_from_config(
    configs: Iterable[TopicConfigAndQueueMapping],
) -> List[TopicQueueMappingDetail]:
    """Collect the mapping details that are present, in iteration order."""
    return [
        config.mapping_detail
        for config in configs
        if config.mapping_detail is not None
    ]
