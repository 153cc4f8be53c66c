"""
Athena query results -> usage rows

GetQueryResults returns the column header as the first row and every datum
as {"VarCharValue": "..."}; NULL columns come back as an empty datum.
Running the query and paginating is the caller's job.
"""

from typing import Any, Dict, Iterator, List

from cloudusage.schemas.usage import RawUsageRow
from cloudusage.services.usage.record import zip_row


def _datum_values(row: Dict[str, Any]) -> List[str]:
    return [datum.get("VarCharValue", "") for datum in row.get("Data", [])]


def rows_from_athena_result(result_set: Dict[str, Any], has_header: bool = True) -> Iterator[RawUsageRow]:
    """
    Yield one RawUsageRow per data row of an Athena ResultSet.

    Args:
        result_set: The "ResultSet" of a GetQueryResults response
        has_header: Only the first page of a paginated result carries the header

    When has_header is False the column names are read from ResultSetMetadata.
    """
    rows = result_set.get("Rows", [])
    if has_header:
        if not rows:
            return
        header = _datum_values(rows[0])
        rows = rows[1:]
    else:
        header = [
            column["Name"]
            for column in result_set.get("ResultSetMetadata", {}).get("ColumnInfo", [])
        ]

    for row in rows:
        yield zip_row(header, _datum_values(row))
