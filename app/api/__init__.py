"""Presentation layer: HTTP routers and WebSocket relay."""
