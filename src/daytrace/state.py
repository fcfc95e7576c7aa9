# SPDX-License-Identifier: MIT

from contextvars import ContextVar

_clear_ids: ContextVar[bool] = ContextVar("clear_ids", default=True)

# Context variable for controlling header visibility in views
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_clear_ids(value: bool) -> None:
    _clear_ids.set(value)


def get_clear_ids() -> bool:
    return _clear_ids.get()


def set_show_header(value: bool) -> None:
    """Set whether the application header should be printed above views."""
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()
