"""
Broker allocation for newly created logical queues.

When a static topic grows, each new logical queue id is handed to one of
the least loaded brokers. Brokers tied for the lowest load form a pool that
is drained before loads are looked at again, so a band of equally loaded
brokers is visited once each in a randomized order.
"""

import random
from typing import Dict, List, Optional

from statictopic.mapping.errors import AllocationError
from statictopic.utils.logging import get_logger

logger = get_logger(__name__)


class MappingAllocator:
    """
    Assigns brokers to logical queue ids, least loaded first.
    
    The allocator owns copies of the seed maps; callers read back
    ``id_to_broker`` and ``broker_num_map`` once growth is done. An
    instance serves a single growth operation and is not thread-safe.
    """
    
    def __init__(
        self,
        id_to_broker: Dict[int, str],
        broker_num_map: Dict[str, int],
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize allocator.
        
        Args:
            id_to_broker: Current logical queue id -> broker assignment
            broker_num_map: Current broker -> assigned queue count
            rng: Random source for tie-breaking
        
        Raises:
            AllocationError: The seed ids are not exactly 0..n-1
        """
        if sorted(id_to_broker) != list(range(len(id_to_broker))):
            raise AllocationError(
                "Assigned queue ids must be contiguous from 0, got "
                f"{sorted(id_to_broker)}"
            )
        
        self._id_to_broker: Dict[int, str] = dict(id_to_broker)
        self._broker_num_map: Dict[str, int] = dict(broker_num_map)
        self._rng = rng or random.Random()
        
        # Brokers tied at the lowest load, drained one per assignment
        self._least_brokers: List[str] = []
        self._current_index = 0
        
        logger.info(
            "MappingAllocator initialized",
            brokers=len(self._broker_num_map),
            assigned_queues=len(self._id_to_broker),
        )
    
    @property
    def id_to_broker(self) -> Dict[int, str]:
        return self._id_to_broker
    
    @property
    def broker_num_map(self) -> Dict[str, int]:
        return self._broker_num_map
    
    def _fresh_state(self) -> None:
        """Collect every broker at the current minimum load."""
        if not self._broker_num_map:
            raise AllocationError("No broker available to host new queues")
        
        min_num = min(self._broker_num_map.values())
        self._least_brokers = [
            broker
            for broker, num in self._broker_num_map.items()
            if num == min_num
        ]
        self._current_index = self._rng.randrange(len(self._least_brokers))
    
    def _next_broker(self) -> str:
        if not self._least_brokers:
            self._fresh_state()
        
        index = self._current_index % len(self._least_brokers)
        return self._least_brokers.pop(index)
    
    def up_to_num(self, max_queue_num: int) -> None:
        """
        Assign brokers to every id in [current size, max_queue_num).
        
        Shrinking is not supported: a target at or below the current
        number of assigned ids leaves the allocator untouched.
        
        Args:
            max_queue_num: Target number of logical queues
        """
        curr_size = len(self._id_to_broker)
        if max_queue_num <= curr_size:
            return
        
        for queue_id in range(curr_size, max_queue_num):
            broker = self._next_broker()
            self._broker_num_map[broker] = self._broker_num_map.get(broker, 0) + 1
            self._id_to_broker[queue_id] = broker
        
        logger.info(
            "Allocated logical queues",
            from_num=curr_size,
            to_num=max_queue_num,
            broker_num_map=self._broker_num_map,
        )


def build_mapping_allocator(
    id_to_broker: Dict[int, str],
    broker_num_map: Dict[str, int],
    rng: Optional[random.Random] = None,
) -> MappingAllocator:
    """
    Create an allocator seeded with the current assignment.
    
    Args:
        id_to_broker: Current logical queue id -> broker assignment
        broker_num_map: Current broker -> assigned queue count
        rng: Random source for tie-breaking
    
    Returns:
        Allocator owning copies of both maps
    """
    return MappingAllocator(id_to_broker, broker_num_map, rng)
