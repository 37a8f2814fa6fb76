# backend/docchat/router/health.py
from __future__ import annotations
import logging
from fastapi import APIRouter, HTTPException

router = APIRouter()
logger = logging.getLogger(__name__)

# Set by main.py at startup
document_loader = None
startup_complete = False


@router.get("/health")
async def health_check():
    """Basic health check - service is running"""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness_check():
    """Readiness check - container built and corpus load attempted"""
    if not startup_complete or document_loader is None:
        raise HTTPException(status_code=503, detail="Service starting up")

    corpus = document_loader.status()
    if not corpus["loaded"]:
        raise HTTPException(status_code=503, detail="Corpus still loading")
    return {"status": "ready", "corpus": corpus}
