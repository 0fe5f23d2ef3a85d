"""
Cluster-wide consistency check of static topic mappings.

Every broker hosting a static topic reports its own mapping detail. Before
any remapping decision is taken, those reports must agree on the topic,
the epoch and the total queue count.
"""

from typing import Dict, Optional, Tuple

from statictopic.mapping.errors import (
    BrokerNameMismatchError,
    DirtyMappingError,
    EpochDivergenceError,
    MissingMappingError,
    QueueNumDivergenceError,
    TopicConfigMismatchError,
    TopicNameDivergenceError,
)
from statictopic.mapping.models import TopicConfigAndQueueMapping
from statictopic.utils.logging import get_logger

logger = get_logger(__name__)


def validate_consistence_of_topic_config_and_queue_mapping(
    broker_config_map: Optional[Dict[str, TopicConfigAndQueueMapping]],
) -> Optional[Tuple[int, int]]:
    """
    Verify that all brokers agree on a static topic's mapping.
    
    Checks, per broker: the mapping detail is present, is filed under its
    own broker name, is not dirty, and names the same topic as the
    broker's config. Across brokers: topic, epoch and total queue count
    are identical. The first entry establishes the expected values.
    
    Args:
        broker_config_map: Broker name -> config and mapping pair
    
    Returns:
        (epoch, total_queues) agreed by all brokers, or None for no input
    
    Raises:
        MissingMappingError: A broker has no mapping detail
        BrokerNameMismatchError: A detail is filed under another broker
        DirtyMappingError: A broker holds uncommitted edits
        TopicConfigMismatchError: Config and detail name different topics
        DivergenceError: Brokers disagree on topic, epoch or queue count
    """
    if not broker_config_map:
        return None
    
    topic = None
    epoch = None
    total_queues = None
    
    for broker, config_mapping in broker_config_map.items():
        detail = config_mapping.mapping_detail
        if detail is None:
            raise MissingMappingError(broker)
        
        if broker != detail.bname:
            raise BrokerNameMismatchError(broker, detail.bname)
        
        if detail.dirty:
            raise DirtyMappingError(broker)
        
        if config_mapping.topic_name != detail.topic:
            raise TopicConfigMismatchError(broker, config_mapping.topic_name, detail.topic)
        
        if topic is None:
            topic = detail.topic
        elif topic != detail.topic:
            raise TopicNameDivergenceError(broker, topic, detail.topic)
        
        if epoch is None:
            epoch = detail.epoch
        elif epoch != detail.epoch:
            raise EpochDivergenceError(broker, epoch, detail.epoch)
        
        if total_queues is None:
            total_queues = detail.total_queues
        elif total_queues != detail.total_queues:
            raise QueueNumDivergenceError(broker, total_queues, detail.total_queues)
    
    logger.debug(
        "Static topic mapping is consistent",
        topic=topic,
        brokers=len(broker_config_map),
        epoch=epoch,
        total_queues=total_queues,
    )
    
    return epoch, total_queues
