"""
Staging of remap plans for delivery to brokers.
"""

import contextlib
import tempfile
from pathlib import Path
from typing import Optional

from statictopic.mapping.errors import StagingWriteError
from statictopic.mapping.models import TopicRemappingDetailWrapper
from statictopic.utils.config import get_config
from statictopic.utils.logging import get_logger

logger = get_logger(__name__)


def write_to_temp(
    wrapper: TopicRemappingDetailWrapper,
    suffix: str,
    directory: Optional[str] = None,
) -> str:
    """
    Write a remap plan to ``<dir>/<topic>-<epoch>-<suffix>``.
    
    The directory defaults to the ``staging.dir`` setting and then to the
    platform temp directory. The file is replaced atomically.
    
    Args:
        wrapper: Remap plan
        suffix: Caller-chosen file name suffix
        directory: Target directory override
    
    Returns:
        Path of the written file
    
    Raises:
        StagingWriteError: The plan could not be written
    """
    directory = directory or get_config().get("staging.dir") or tempfile.gettempdir()
    path = Path(directory) / f"{wrapper.topic}-{wrapper.epoch}-{suffix}"
    file_name = str(path)
    data = wrapper.to_json()
    
    # Write atomically
    tmp_path = Path(file_name + ".tmp")
    try:
        with open(tmp_path, "w") as f:
            f.write(data)
        tmp_path.replace(path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        logger.error(
            "Failed to stage remap plan",
            topic=wrapper.topic,
            epoch=wrapper.epoch,
            path=file_name,
            error=str(e),
        )
        raise StagingWriteError(file_name) from e
    
    logger.info(
        "Staged remap plan",
        topic=wrapper.topic,
        epoch=wrapper.epoch,
        path=file_name,
        bytes=len(data),
    )
    
    return file_name
