import os
import platform
import time
from typing import Any, Dict

from downpress.config import get_settings

BUILD_VERSION = os.getenv("BUILD_VERSION", "dev")
GIT_SHA = os.getenv("GIT_SHA", "unknown")


async def health() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "version": BUILD_VERSION,
        "git": GIT_SHA,
        "ts": time.time(),
        "env": {
            "four_ball_share": settings.four_ball_share,
            "default_course": settings.default_course_id,
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }
