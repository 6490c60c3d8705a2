"""Loading program source from disk."""

import logging
from pathlib import Path

from .errors import FileAccessError

logger = logging.getLogger(__name__)


def read_source_file(path) -> str:
    """Read a source file, joining its lines with the line breaks removed."""
    source_path = Path(path)
    try:
        # latin-1 maps every byte, so any comment text decodes
        with open(source_path, "r", encoding="latin-1") as f:
            source = "".join(line.rstrip("\r\n") for line in f)
    except OSError as e:
        logger.error("Cannot read %s: %s", source_path, e)
        raise FileAccessError(str(path), "cannot open file") from e
    logger.debug("Loaded %d characters from %s", len(source), source_path)
    return source
