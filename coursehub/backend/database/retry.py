import logging

import backoff
from flask import current_app, has_app_context
from pymongo.errors import AutoReconnect, NetworkTimeout

logger = logging.getLogger(__name__)

# AutoReconnect also covers NotPrimaryError and connection failures mid-operation
TRANSIENT_STORE_ERRORS = (AutoReconnect, NetworkTimeout)


def _max_tries():
    if has_app_context():
        return current_app.config.get("RETRY_MAX_TRIES", 3)
    return 3


def _on_backoff(details):
    logger.warning(
        "Transient store error, backing off {wait:0.2f} seconds after {tries} tries calling {target.__name__}".format(
            **details
        )
    )


def _on_giveup(details):
    logger.error("Giving up on {target.__name__} after {tries} tries".format(**details))


retry_transient_store_errors = backoff.on_exception(
    backoff.expo,
    TRANSIENT_STORE_ERRORS,
    max_tries=_max_tries,
    factor=0.1,
    on_backoff=_on_backoff,
    on_giveup=_on_giveup,
)
