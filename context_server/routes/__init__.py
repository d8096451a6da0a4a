"""
Route Modules:
- discovery: /.well-known/model-context-protocol.json metadata document
- contexts: /mcp context fetch endpoint
- health: liveness and health probes
"""

from . import contexts, discovery, health

__all__ = ["contexts", "discovery", "health"]
