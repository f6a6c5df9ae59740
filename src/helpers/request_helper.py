"""
Methods to help with the webhook request
Separating in a module to help in tests
"""

from uuid import uuid4

import flask

DELIVERY_HEADER = "X-GitHub-Delivery"


def get_delivery_id() -> str:
    """Get the webhook delivery id, or a new id when there is no delivery"""
    if flask.has_request_context():
        if delivery_id := flask.request.headers.get(DELIVERY_HEADER):
            return delivery_id
    return uuid4().hex
