"""Gateway module for kalyana.

One stateless relay operation with two deployment adapters:
- relay.py: validation, persona injection and the single upstream call
- asgi.py: FastAPI application
- serverless.py: function-runtime event handler
"""

from .models import RelayResult, WireTurn
from .relay import Gateway

__all__ = ["Gateway", "RelayResult", "WireTurn"]
