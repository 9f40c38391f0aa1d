"""Leave Calc SDK - Core functionality for leave day reconciliation."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_output_format,
    get_holidays_path,
    parse_holiday_entries,
    load_holiday_entries,
    load_holidays,
    save_holiday_entries,
    add_holiday,
    remove_holiday,
    import_holidays,
    ConfigNotFoundError,
    HolidayFileError,
)

from .dates import (
    parse_iso,
    to_iso,
    coerce_iso,
    holiday_set,
    is_weekend,
    is_workday,
    workdays_between_inclusive,
    add_workdays_iso,
    next_workday_iso,
    end_date_for_workday_count,
)

from .reconcile import (
    LeaveSplit,
    LeaveDelta,
    LeaveRequest,
    Advisory,
    ReconciliationResult,
    AllocationCheck,
    clamp,
    to_half,
    normalize_split,
    leave_diff,
    reconcile_leave_change,
    check_allocation,
    MAX_SPLIT_DAYS,
)

from .balances import (
    LeaveBalance,
    resume_work_on,
    ANNUAL_LEAVE_CAP,
)

from .schemas import (
    HolidayEntry,
    HolidayFile,
    LeaveChangeInput,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_output_format",
    "get_holidays_path",
    "parse_holiday_entries",
    "load_holiday_entries",
    "load_holidays",
    "save_holiday_entries",
    "add_holiday",
    "remove_holiday",
    "import_holidays",
    "ConfigNotFoundError",
    "HolidayFileError",
    # Dates
    "parse_iso",
    "to_iso",
    "coerce_iso",
    "holiday_set",
    "is_weekend",
    "is_workday",
    "workdays_between_inclusive",
    "add_workdays_iso",
    "next_workday_iso",
    "end_date_for_workday_count",
    # Reconciliation
    "LeaveSplit",
    "LeaveDelta",
    "LeaveRequest",
    "Advisory",
    "ReconciliationResult",
    "AllocationCheck",
    "clamp",
    "to_half",
    "normalize_split",
    "leave_diff",
    "reconcile_leave_change",
    "check_allocation",
    "MAX_SPLIT_DAYS",
    # Balances
    "LeaveBalance",
    "resume_work_on",
    "ANNUAL_LEAVE_CAP",
    # Schemas
    "HolidayEntry",
    "HolidayFile",
    "LeaveChangeInput",
]
