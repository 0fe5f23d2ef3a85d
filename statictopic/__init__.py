"""
statictopic - metadata consistency and queue allocation for static topics.

A static topic partitions its logical queues across brokers through an
explicit, versioned mapping table. This package provides:
- Epoch and queue count probes over per-broker mapping records
- Cluster-wide consistency validation of those records
- A merged logical queue -> leader broker table
- Least-loaded broker allocation for newly created logical queues
"""

__version__ = "0.1.0"

from statictopic import mapping, utils

__all__ = [
    "mapping",
    "utils",
]
