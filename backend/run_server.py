#!/usr/bin/env python3
"""
Uvicorn runner for the Voyatek mock backend.

Host, port and log level come from VOYATEK_HOST, VOYATEK_PORT and
VOYATEK_LOG_LEVEL; the response shape from VOYATEK_RESPONSE_SHAPE.
"""

import uvicorn
from voyatek.config import settings

if __name__ == "__main__":
    print(f"Serving mock backend ({settings.response_shape} responses) on {settings.server_host}:{settings.server_port}")
    uvicorn.run(
        "voyatek.mock_backend:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
