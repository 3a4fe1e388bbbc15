"""Xbox LIVE service status over the kvchecker WebSocket feed."""

__version__ = "0.1.0"
