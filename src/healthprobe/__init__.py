"""
healthprobe - Service health endpoints

Liveness, readiness and health reporting for a FastAPI service backed
by MongoDB.
"""

from importlib.metadata import version

__version__ = version("healthprobe")
