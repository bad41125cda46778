"""Display client for the vows page: polls the gate and renders the vows."""
from vowsite.client.api import VowsApiClient
from vowsite.client.poller import VowsPoller
from vowsite.client.storage import LocalStorage
from vowsite.client.view import FileSink, VowsView

__all__ = [
    "FileSink",
    "LocalStorage",
    "VowsApiClient",
    "VowsPoller",
    "VowsView",
]
