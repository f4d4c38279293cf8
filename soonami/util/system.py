import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def get_cache_directory() -> Path | None:
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / "soonami"
    else:
        cache_dir = Path.home() / ".cache/soonami"

    if not os.path.exists(cache_dir):
        try:
            os.makedirs(cache_dir, mode=0o700)
        except OSError as e:
            logger.warning(f'couldn\'t create "{cache_dir}": {e}')
            return None

    return cache_dir
