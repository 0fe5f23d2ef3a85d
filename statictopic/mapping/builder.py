"""
Global view of a static topic's logical queues.

Merges per-broker mapping records into a single logical queue id -> leader
table. A broker's claim on a logical queue only counts when the broker is
itself the leader (last episode) of that queue, and claims from records
with a higher epoch win over those from lower epochs.
"""

from typing import Dict, List, Sequence

from statictopic.mapping.errors import DuplicateLeaderError, IncompleteMappingError
from statictopic.mapping.models import (
    LogicQueueMappingItem,
    TopicQueueMappingDetail,
    TopicQueueMappingOne,
)
from statictopic.utils.logging import get_logger

logger = get_logger(__name__)


def get_leader_item(items: Sequence[LogicQueueMappingItem]) -> LogicQueueMappingItem:
    """
    Get the current episode of a logical queue.
    
    Args:
        items: Episode history, oldest first
    
    Returns:
        The last episode
    """
    if not items:
        raise ValueError("Cannot find the leader of an empty mapping item list")
    return items[-1]


def get_leader_broker(items: Sequence[LogicQueueMappingItem]) -> str:
    """Get the broker leading a logical queue."""
    return get_leader_item(items).bname


def build_mapping_items(
    mapping_details: List[TopicQueueMappingDetail],
    replace: bool,
    check_consistence: bool,
) -> Dict[int, TopicQueueMappingOne]:
    """
    Build the logical queue id -> leader table for a topic.
    
    ``mapping_details`` is sorted in place by descending epoch so the
    freshest claim on each logical queue is seen first.
    
    Args:
        mapping_details: Per-broker mapping records of one topic
        replace: Keep the higher-epoch claim on duplicates instead of failing
        check_consistence: Require every id in [0, total queues) to be led
    
    Returns:
        Logical queue id -> global queue entry
    
    Raises:
        DuplicateLeaderError: Two records lead one queue and replace is False
        IncompleteMappingError: The table does not cover [0, total queues)
    """
    mapping_details.sort(key=lambda detail: detail.epoch, reverse=True)
    
    max_num = 0
    global_id_map: Dict[int, TopicQueueMappingOne] = {}
    
    for detail in mapping_details:
        if detail.total_queues > max_num:
            max_num = detail.total_queues
        
        for global_id, items in detail.hosted_queues.items():
            leader = get_leader_broker(items)
            if leader != detail.bname:
                # not the leader
                continue
            
            if global_id in global_id_map:
                existing = global_id_map[global_id]
                if not replace:
                    raise DuplicateLeaderError(global_id, existing.bname, detail.bname)
                logger.debug(
                    "Ignoring stale leader claim",
                    topic=detail.topic,
                    queue_id=global_id,
                    broker=detail.bname,
                    epoch=detail.epoch,
                    kept_broker=existing.bname,
                )
                continue
            
            global_id_map[global_id] = TopicQueueMappingOne(
                topic=detail.topic,
                bname=detail.bname,
                global_id=global_id,
                items=list(items),
            )
    
    if check_consistence:
        missing_id = next(
            (queue_id for queue_id in range(max_num) if queue_id not in global_id_map),
            None,
        )
        if len(global_id_map) != max_num or missing_id is not None:
            raise IncompleteMappingError(max_num, len(global_id_map), missing_id)
    
    logger.debug(
        "Built global mapping",
        records=len(mapping_details),
        queues=len(global_id_map),
        total_queues=max_num,
    )
    
    return global_id_map
