"""
Failure types for static topic mapping operations.

Every failure is fatal to the call that raised it. Messages name the
offending broker, field and values so they can be shown to an operator
as-is.
"""

from typing import Any, Optional


class StaticTopicError(Exception):
    """Base class for all static topic mapping failures."""
    pass


class MissingMappingError(StaticTopicError):
    """Raised when a broker has not initialized static topic metadata."""
    
    def __init__(self, broker: str):
        self.broker = broker
        super().__init__(f"Mapping info should not be null in broker {broker}")


class IdentityMismatchError(StaticTopicError):
    """Raised when a record disagrees with the key or config it is filed under."""
    
    def __init__(self, broker: str, field: str, expected: Any, actual: Any, message: str):
        self.broker = broker
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class BrokerNameMismatchError(IdentityMismatchError):
    """Raised when a mapping detail's broker name differs from its map key."""
    
    def __init__(self, broker: str, actual: str):
        super().__init__(
            broker,
            "bname",
            broker,
            actual,
            f"The broker name is not equal {broker} != {actual}",
        )


class TopicConfigMismatchError(IdentityMismatchError):
    """Raised when a broker's topic config and mapping detail name different topics."""
    
    def __init__(self, broker: str, expected: str, actual: str):
        super().__init__(
            broker,
            "topic",
            expected,
            actual,
            f"The topic name is inconsistent in broker {broker}: "
            f"config has {expected}, mapping has {actual}",
        )


class DirtyMappingError(StaticTopicError):
    """Raised when a broker's mapping has uncommitted local edits."""
    
    def __init__(self, broker: str):
        self.broker = broker
        super().__init__(f"The mapping info is dirty in broker {broker}")


class DivergenceError(StaticTopicError):
    """Raised when two brokers disagree on a field that must be cluster-wide."""
    
    field = ""
    
    def __init__(self, broker: str, expected: Any, actual: Any):
        self.broker = broker
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{self.field} does not match {expected} != {actual} in {broker}"
        )


class TopicNameDivergenceError(DivergenceError):
    field = "topic"


class EpochDivergenceError(DivergenceError):
    field = "epoch"


class QueueNumDivergenceError(DivergenceError):
    field = "total queue number"


class DuplicateLeaderError(StaticTopicError):
    """Raised when two brokers both lead the same logical queue."""
    
    def __init__(self, queue_id: int, existing_broker: str, broker: str):
        self.queue_id = queue_id
        self.existing_broker = existing_broker
        self.broker = broker
        super().__init__(
            f"The queue id {queue_id} is duplicated in broker "
            f"{existing_broker} {broker}"
        )


class IncompleteMappingError(StaticTopicError):
    """Raised when the merged mapping does not cover [0, total queues)."""
    
    def __init__(self, expected: int, actual: int, missing_id: Optional[int] = None):
        self.expected = expected
        self.actual = actual
        self.missing_id = missing_id
        if missing_id is None:
            message = (
                "The total queue number in config does not match the real "
                f"hosted queues {expected} != {actual}"
            )
        else:
            message = (
                f"The queue number {missing_id} is not in the global id map "
                f"(expected {expected} queues, found {actual})"
            )
        super().__init__(message)


class AllocationError(StaticTopicError):
    """Raised when the allocator has no broker to assign a queue to."""
    pass


class StagingWriteError(StaticTopicError):
    """Raised when a remap plan cannot be written to its staging file."""
    
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"write file failed {path}")
