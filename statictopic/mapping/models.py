"""
Static topic mapping data structures.

A static topic spreads its logical queues over several brokers through an
explicit, versioned mapping table. Each broker keeps a
``TopicQueueMappingDetail`` describing the logical queues it hosts; every
logical queue carries its ownership history as an append-only list of
``LogicQueueMappingItem`` episodes whose last element is the current leader.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

DEFAULT_SCOPE = "__global__"

PERM_READ = 0x4
PERM_WRITE = 0x2


@dataclass(frozen=True)
class LogicQueueMappingItem:
    """
    One episode of a broker owning a logical queue.
    
    Attributes:
        bname: Broker that owned the logical queue during this episode
        gen: Generation of the episode within the logical queue's history
        queue_id: Physical queue id on the owning broker
        logic_offset: Logical offset at which the episode begins
        start_offset: Physical offset at which the episode begins
        end_offset: Physical offset at which the episode ends (-1 = open)
        time_of_start: Episode start timestamp in ms (-1 = unknown)
        time_of_end: Episode end timestamp in ms (-1 = open)
    """
    bname: str
    gen: int = 0
    queue_id: int = 0
    logic_offset: int = 0
    start_offset: int = 0
    end_offset: int = -1
    time_of_start: int = -1
    time_of_end: int = -1
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'bname': self.bname,
            'gen': self.gen,
            'queue_id': self.queue_id,
            'logic_offset': self.logic_offset,
            'start_offset': self.start_offset,
            'end_offset': self.end_offset,
            'time_of_start': self.time_of_start,
            'time_of_end': self.time_of_end,
        }
    
    @staticmethod
    def from_dict(data: dict) -> 'LogicQueueMappingItem':
        """Create from dictionary."""
        return LogicQueueMappingItem(
            bname=data['bname'],
            gen=data.get('gen', 0),
            queue_id=data.get('queue_id', 0),
            logic_offset=data.get('logic_offset', 0),
            start_offset=data.get('start_offset', 0),
            end_offset=data.get('end_offset', -1),
            time_of_start=data.get('time_of_start', -1),
            time_of_end=data.get('time_of_end', -1),
        )


def _items_to_dicts(items: List[LogicQueueMappingItem]) -> List[dict]:
    return [item.to_dict() for item in items]


def _items_from_dicts(data: List[dict]) -> List[LogicQueueMappingItem]:
    return [LogicQueueMappingItem.from_dict(item) for item in data]


@dataclass
class TopicQueueMappingDetail:
    """
    One broker's declaration of the static topic mapping it knows about.
    
    Attributes:
        topic: Topic name
        bname: Broker owning this record
        epoch: Version of the mapping; higher supersedes lower
        total_queues: Declared total logical queue count at this epoch
        dirty: Broker holds uncommitted local edits
        hosted_queues: Logical queue id -> ordered episode history
        scope: Cluster scope of the static topic
    """
    topic: str
    bname: str
    epoch: int = 0
    total_queues: int = 0
    dirty: bool = False
    hosted_queues: Dict[int, List[LogicQueueMappingItem]] = field(default_factory=dict)
    scope: str = DEFAULT_SCOPE
    
    def __post_init__(self):
        for queue_id, items in self.hosted_queues.items():
            if not isinstance(queue_id, int) or queue_id < 0:
                raise ValueError(
                    f"Logical queue id must be a non-negative integer, got {queue_id!r} "
                    f"in broker {self.bname}"
                )
            if not items:
                raise ValueError(
                    f"Logical queue {queue_id} has no mapping items in broker {self.bname}"
                )
    
    def leader_of(self, queue_id: int) -> str:
        """
        Get the leader broker of a hosted logical queue.
        
        Args:
            queue_id: Logical queue id
        
        Returns:
            Broker name of the last episode
        """
        return self.hosted_queues[queue_id][-1].bname
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'topic': self.topic,
            'bname': self.bname,
            'scope': self.scope,
            'epoch': self.epoch,
            'total_queues': self.total_queues,
            'dirty': self.dirty,
            'hosted_queues': {
                str(queue_id): _items_to_dicts(items)
                for queue_id, items in sorted(self.hosted_queues.items())
            },
        }
    
    @staticmethod
    def from_dict(data: dict) -> 'TopicQueueMappingDetail':
        """Create from dictionary."""
        return TopicQueueMappingDetail(
            topic=data['topic'],
            bname=data['bname'],
            scope=data.get('scope', DEFAULT_SCOPE),
            epoch=data.get('epoch', 0),
            total_queues=data.get('total_queues', 0),
            dirty=data.get('dirty', False),
            hosted_queues={
                int(queue_id): _items_from_dicts(items)
                for queue_id, items in data.get('hosted_queues', {}).items()
            },
        )


@dataclass
class TopicConfig:
    """
    A broker's local configuration of a topic.
    
    Attributes:
        topic_name: Topic name
        read_queue_nums: Number of readable queues on the broker
        write_queue_nums: Number of writable queues on the broker
        perm: Permission bits (read/write)
    """
    topic_name: str
    read_queue_nums: int = 0
    write_queue_nums: int = 0
    perm: int = PERM_READ | PERM_WRITE
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'topic_name': self.topic_name,
            'read_queue_nums': self.read_queue_nums,
            'write_queue_nums': self.write_queue_nums,
            'perm': self.perm,
        }
    
    @staticmethod
    def from_dict(data: dict) -> 'TopicConfig':
        """Create from dictionary."""
        return TopicConfig(
            topic_name=data['topic_name'],
            read_queue_nums=data.get('read_queue_nums', 0),
            write_queue_nums=data.get('write_queue_nums', 0),
            perm=data.get('perm', PERM_READ | PERM_WRITE),
        )


@dataclass
class TopicConfigAndQueueMapping:
    """
    A broker's topic config paired with its mapping detail.
    
    ``mapping_detail`` is None when the broker has not initialized static
    topic metadata yet.
    """
    topic_config: TopicConfig
    mapping_detail: Optional[TopicQueueMappingDetail] = None
    
    @property
    def topic_name(self) -> str:
        return self.topic_config.topic_name
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'topic_config': self.topic_config.to_dict(),
            'mapping_detail': (
                self.mapping_detail.to_dict() if self.mapping_detail else None
            ),
        }
    
    @staticmethod
    def from_dict(data: dict) -> 'TopicConfigAndQueueMapping':
        """Create from dictionary."""
        detail = data.get('mapping_detail')
        return TopicConfigAndQueueMapping(
            topic_config=TopicConfig.from_dict(data['topic_config']),
            mapping_detail=TopicQueueMappingDetail.from_dict(detail) if detail else None,
        )


@dataclass
class TopicQueueMappingOne:
    """
    Authoritative owner of one logical queue in the merged global view.
    
    Attributes:
        topic: Topic name
        bname: Leader broker
        global_id: Logical queue id
        items: Episode history copied from the leader's record
    """
    topic: str
    bname: str
    global_id: int
    items: List[LogicQueueMappingItem] = field(default_factory=list)


class RemappingType:
    """Kinds of remap plans."""
    
    CREATE_OR_UPDATE = "CREATE_OR_UPDATE"
    REMAPPING = "REMAPPING"


@dataclass
class TopicRemappingDetailWrapper:
    """
    A remap plan staged for delivery to brokers.
    
    Attributes:
        topic: Topic name
        type: Plan kind (see RemappingType)
        epoch: Epoch the plan moves the topic to
        broker_config_map: Broker name -> target config and mapping
        broker_to_map_in: Brokers gaining logical queues
        broker_to_map_out: Brokers giving up logical queues
    """
    topic: str
    type: str
    epoch: int
    broker_config_map: Dict[str, TopicConfigAndQueueMapping] = field(default_factory=dict)
    broker_to_map_in: Set[str] = field(default_factory=set)
    broker_to_map_out: Set[str] = field(default_factory=set)
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'topic': self.topic,
            'type': self.type,
            'epoch': self.epoch,
            'broker_config_map': {
                broker: config.to_dict()
                for broker, config in sorted(self.broker_config_map.items())
            },
            'broker_to_map_in': sorted(self.broker_to_map_in),
            'broker_to_map_out': sorted(self.broker_to_map_out),
        }
    
    @staticmethod
    def from_dict(data: dict) -> 'TopicRemappingDetailWrapper':
        """Create from dictionary."""
        return TopicRemappingDetailWrapper(
            topic=data['topic'],
            type=data.get('type', RemappingType.CREATE_OR_UPDATE),
            epoch=data.get('epoch', 0),
            broker_config_map={
                broker: TopicConfigAndQueueMapping.from_dict(config)
                for broker, config in data.get('broker_config_map', {}).items()
            },
            broker_to_map_in=set(data.get('broker_to_map_in', [])),
            broker_to_map_out=set(data.get('broker_to_map_out', [])),
        )
    
    def to_json(self) -> str:
        """Serialize the plan to a JSON document."""
        return json.dumps(self.to_dict(), indent=2)
    
    @staticmethod
    def from_json(data: str) -> 'TopicRemappingDetailWrapper':
        """Load a plan from a JSON document."""
        return TopicRemappingDetailWrapper.from_dict(json.loads(data))
