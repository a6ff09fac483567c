"""HTTP and WebSocket bridge between browser clients and the engine."""
