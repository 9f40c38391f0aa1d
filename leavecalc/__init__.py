"""Leave Calc - workday counting and leave balance reconciliation."""

__version__ = "0.1.0"
