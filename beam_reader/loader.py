import gzip
import logging
from pathlib import Path
from typing import Optional, Union

from .config import DecoderConfig
from .decoder import decode_module
from .models import Module

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def read_beam_bytes(path: Union[str, Path]) -> bytes:
    path = Path(path)
    data = path.read_bytes()
    logger.debug("Read %d bytes from %s", len(data), path)
    if data.startswith(GZIP_MAGIC):
        data = gzip.decompress(data)
        logger.debug("Decompressed %s to %d bytes", path, len(data))
    return data


def load_file(
    path: Union[str, Path], config: Optional[DecoderConfig] = None
) -> Module:
    config = config or DecoderConfig.from_env()
    module = decode_module(read_beam_bytes(path), config)
    for diagnostic in module.diagnostics:
        logger.warning("%s: %s", path, diagnostic.message)
    logger.info(
        "Decoded %s: module %s, %d atoms, %d imports, %d exports, %d instructions",
        path,
        module.name,
        len(module.atoms),
        len(module.imports),
        len(module.exports),
        len(module.instructions),
    )
    return module
