"""Request and response models, websocket channel messages, push-message parsing and a local order book for the OKX v5 API."""

__version__ = "0.1.0"