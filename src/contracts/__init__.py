"""Alert Contract — canonical data structures shared by all modules."""

from src.contracts.alert import Alert
from src.contracts.applied_filter import AppliedFilter
from src.contracts.enums import AlertStatus, Dimension, SortDirection, ValueState
from src.contracts.filter_state import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, FilterState
from src.contracts.page import RemoteAlertPage
from src.contracts.query import RemoteQuery

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "Alert",
    "AlertStatus",
    "AppliedFilter",
    "Dimension",
    "FilterState",
    "RemoteAlertPage",
    "RemoteQuery",
    "SortDirection",
    "ValueState",
]
