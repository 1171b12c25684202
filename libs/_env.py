## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import logging


logger = logging.getLogger(__name__)


def fn_getenv_s(name: str) -> str:
    return os.environ.get(name, "")


__functions__ = [ fn_getenv_s ]

logger.debug('LOADED libs/_env.py')
