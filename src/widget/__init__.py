"""Visit counter widget package"""
from .config import CounterSettings, get_settings
from .page import Page
from .visit_counter import (
    CounterFetchError,
    CounterHTTPError,
    CounterNetworkError,
    CounterParseError,
    VisitCounterWidget,
    render_with_counter,
)

__all__ = [
    'CounterSettings', 'get_settings', 'Page',
    'CounterFetchError', 'CounterHTTPError', 'CounterNetworkError', 'CounterParseError',
    'VisitCounterWidget', 'render_with_counter',
]
