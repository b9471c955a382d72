"""
Local library modules shared across the dashboard.

Modules:
    logs: Logging utilities
    objects: Object hashing and serialization
    paths: Path utilities
    clients: HTTP client factory for the admin REST API
    caches: Disk-based caching with TTL support
"""

from mixer_admin.lib import caches, clients, logs, objects, paths

__all__ = ["caches", "clients", "logs", "objects", "paths"]
