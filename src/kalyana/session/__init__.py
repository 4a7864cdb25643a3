"""Session module for kalyana.

Module structure:
- models.py: Phase and ReplySegments
- citation.py: splitting replies into main text and citation
- client.py: how the controller reaches the gateway
- controller.py: the conversation state machine
"""

from .citation import find_links, join_segments, split_citation
from .client import GatewayClient, HttpGatewayClient, LocalGatewayClient, reply_text
from .controller import SUBMIT_ERROR_MESSAGE, SessionController, SessionPrompts
from .models import Phase, ReplySegments

__all__ = [
    "SUBMIT_ERROR_MESSAGE",
    "GatewayClient",
    "HttpGatewayClient",
    "LocalGatewayClient",
    "Phase",
    "ReplySegments",
    "SessionController",
    "SessionPrompts",
    "find_links",
    "join_segments",
    "reply_text",
    "split_citation",
]
