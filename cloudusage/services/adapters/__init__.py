"""Turn billing source results into RawUsageRow mappings."""

from cloudusage.services.adapters.athena import rows_from_athena_result
from cloudusage.services.adapters.cur_frame import rows_from_cur_frame

__all__ = ["rows_from_athena_result", "rows_from_cur_frame"]
