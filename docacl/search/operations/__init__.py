from .access_control_filter import AccessControlFilter

__all__ = [
    "AccessControlFilter",
]
