"""Coordination store paths."""

STATUS = "status"
AGENT_HOST_INFO = "agent-host-info"


def status_agent_host_info(agent_id: str) -> str:
    """Path of the node holding the host info published by ``agent_id``."""
    return f"{STATUS}/{AGENT_HOST_INFO}/{agent_id}"
