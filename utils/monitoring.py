"""
Monitoring Utilities
Bot counters and process metrics
"""

import platform
import time
from typing import Any, Dict

import psutil

from utils.text import as_text


class Monitoring:
    """Counts what the bot does and reports process metrics."""

    def __init__(self):
        self.start_time = time.time()
        self.metrics = {
            "messagesProcessed": 0,
            "commandsExecuted": 0,
            "errors": 0,
        }

    def record_message(self) -> None:
        self.metrics["messagesProcessed"] += 1

    def record_command(self) -> None:
        self.metrics["commandsExecuted"] += 1

    def record_error(self) -> None:
        self.metrics["errors"] += 1

    def uptime_millis(self) -> int:
        return int((time.time() - self.start_time) * 1000)

    def get_system_metrics(self) -> Dict[str, Any]:
        """
        Get system metrics.

        Returns:
            Dict with memory, uptime, and platform info
        """
        process = psutil.Process()
        memory_info = process.memory_info()

        return {
            "memory": {
                "rssMb": round(memory_info.rss / 1024 / 1024),
                "vmsMb": round(memory_info.vms / 1024 / 1024),
            },
            "uptime": as_text(self.uptime_millis()),
            "platform": {
                "python": platform.python_version(),
                "os": f"{platform.system()} {platform.release()}",
            },
        }

    def snapshot(self) -> Dict[str, Any]:
        """Counters plus system metrics, for the health endpoint."""
        return {"metrics": dict(self.metrics), **self.get_system_metrics()}
