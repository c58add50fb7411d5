"""Health-check payload."""

ENGINE_VERSION = "1.0"


def get_ping_message() -> str:
    """Return the health-check message along with the engine version."""
    return f"pong (engine {ENGINE_VERSION})"
