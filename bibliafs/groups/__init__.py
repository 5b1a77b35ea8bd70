"""Study group plan limits and trial rules."""

from .access import GroupAccessError, GroupAccessPolicy, GroupLimits

__all__ = ["GroupAccessError", "GroupAccessPolicy", "GroupLimits"]
