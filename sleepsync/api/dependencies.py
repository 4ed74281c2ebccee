"""Reusable FastAPI dependencies (nap log)."""

import logging
from typing import Annotated

from fastapi import Depends, Request

from sleepsync.services.nap_log_service import NapLog

logger = logging.getLogger(__name__)


def get_nap_log(request: Request) -> NapLog:
    """
    Return the process nap log from application state.
    Created on first use if the lifespan did not run (e.g. in tests).
    """
    nap_log = getattr(request.app.state, "nap_log", None)
    if nap_log is None:
        logger.debug("No nap log on app state, creating an empty one")
        nap_log = NapLog()
        request.app.state.nap_log = nap_log
    return nap_log


NapLogDep = Annotated[NapLog, Depends(get_nap_log)]
