"""
Extraction of the image identifier from `build` output.
"""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

_BUILT_PATTERN = re.compile(r"Successfully built (\S+)")


def extract_built_image_id(output: str) -> Optional[str]:
    """
    Return the identifier from the last `Successfully built <id>` line.

    Newer builders do not print that line at all; in that case None is returned
    and the caller decides what an unknown identifier means.
    """
    matches = _BUILT_PATTERN.findall(output)
    if not matches:
        logger.debug("No 'Successfully built' line in build output")
        return None
    return matches[-1]
