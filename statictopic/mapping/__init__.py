"""
Static topic queue mapping.

Validates per-broker mapping records, merges them into one global logical
queue table and allocates brokers for new logical queues.
"""

from statictopic.mapping.allocator import MappingAllocator, build_mapping_allocator
from statictopic.mapping.builder import (
    build_mapping_items,
    get_leader_broker,
    get_leader_item,
)
from statictopic.mapping.errors import (
    AllocationError,
    BrokerNameMismatchError,
    DirtyMappingError,
    DivergenceError,
    DuplicateLeaderError,
    EpochDivergenceError,
    IdentityMismatchError,
    IncompleteMappingError,
    MissingMappingError,
    QueueNumDivergenceError,
    StagingWriteError,
    StaticTopicError,
    TopicConfigMismatchError,
    TopicNameDivergenceError,
)
from statictopic.mapping.models import (
    LogicQueueMappingItem,
    RemappingType,
    TopicConfig,
    TopicConfigAndQueueMapping,
    TopicQueueMappingDetail,
    TopicQueueMappingOne,
    TopicRemappingDetailWrapper,
)
from statictopic.mapping.staging import write_to_temp
from statictopic.mapping.summary import (
    find_max_epoch_and_queue_num,
    get_mapping_detail_from_config,
)
from statictopic.mapping.validation import (
    validate_consistence_of_topic_config_and_queue_mapping,
)

__all__ = [
    # Models
    "LogicQueueMappingItem",
    "RemappingType",
    "TopicConfig",
    "TopicConfigAndQueueMapping",
    "TopicQueueMappingDetail",
    "TopicQueueMappingOne",
    "TopicRemappingDetailWrapper",
    # Operations
    "MappingAllocator",
    "build_mapping_allocator",
    "build_mapping_items",
    "find_max_epoch_and_queue_num",
    "get_leader_broker",
    "get_leader_item",
    "get_mapping_detail_from_config",
    "validate_consistence_of_topic_config_and_queue_mapping",
    "write_to_temp",
    # Errors
    "StaticTopicError",
    "MissingMappingError",
    "IdentityMismatchError",
    "BrokerNameMismatchError",
    "TopicConfigMismatchError",
    "DirtyMappingError",
    "DivergenceError",
    "TopicNameDivergenceError",
    "EpochDivergenceError",
    "QueueNumDivergenceError",
    "DuplicateLeaderError",
    "IncompleteMappingError",
    "AllocationError",
    "StagingWriteError",
]
