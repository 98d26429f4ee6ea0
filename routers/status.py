# routers/status.py
import asyncio
import logging
import socket

from fastapi import APIRouter

from config_sys import DB_HOST
from utils.response_helper import response_error

router = APIRouter(tags=["Status"])
logger = logging.getLogger(__name__)

FAMILY_VERSIONS = {socket.AF_INET: 4, socket.AF_INET6: 6}


@router.get("/health")
async def health_check():
    return {"status": "OK"}


@router.get("/test-dns")
async def test_dns():
    """Resolve the database host, used to debug container networking"""
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(DB_HOST, None, type=socket.SOCK_STREAM)
    except (socket.gaierror, OSError) as e:
        logger.warning(f"DNS lookup for {DB_HOST} failed: {str(e)}")
        return response_error(500, f"DNS lookup failed: {str(e)}")

    family, _, _, _, sockaddr = infos[0]
    return {
        "host": DB_HOST,
        "address": sockaddr[0],
        "family": FAMILY_VERSIONS.get(family, int(family)),
    }
