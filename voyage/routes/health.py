# FILE: voyage/routes/health.py
"""
Health check endpoint
"""
import logging
import os
from fastapi import APIRouter

from voyage import __version__
from voyage.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health_check():
    """
    Health check endpoint
    Reports whether the memory directory is writable
    """
    settings = get_settings()
    writable = os.access(settings.memory_dir, os.W_OK)

    if not writable:
        logger.warning(f"Memory directory not writable: {settings.memory_dir}")

    return {
        "status": "healthy" if writable else "degraded",
        "version": __version__,
        "environment": settings.environment,
        "memoryDir": settings.memory_dir,
        "storeWritable": writable
    }
