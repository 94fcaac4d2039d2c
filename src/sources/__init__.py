"""Alert sources — where pages of triggered alerts come from.

  remote: alert storage HTTP API (httpx)
  memory: in-process list, evaluated with the same query semantics
"""

from src.sources.memory import InMemoryAlertSource
from src.sources.remote import AlertSource, AlertSourceError, HttpAlertSource

__all__ = ["AlertSource", "AlertSourceError", "HttpAlertSource", "InMemoryAlertSource"]
