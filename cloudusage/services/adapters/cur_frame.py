"""
CUR Parquet frames -> usage rows

Maps the column names of a Cost & Usage Report Parquet export onto the usage
query aliases, so files read with pandas/pyarrow feed the same assembler as
Athena results.
"""

from typing import Iterator

import pandas as pd
import structlog

from cloudusage.schemas.usage import RawUsageField, RawUsageRow

logger = structlog.get_logger()

CUR_COLUMN_ALIASES = {
    "line_item_product_code": RawUsageField.SERVICE_NAME,
    "line_item_usage_type": RawUsageField.USAGE_TYPE,
    "line_item_usage_amount": RawUsageField.USAGE_AMOUNT,
    "pricing_unit": RawUsageField.USAGE_UNIT,
    "line_item_unblended_cost": RawUsageField.COST,
    "line_item_usage_start_date": RawUsageField.TIMESTAMP,
    "product_region": RawUsageField.REGION,
    "line_item_usage_account_id": RawUsageField.ACCOUNT,
    "product_vcpu": RawUsageField.VCPUS,
}


def _to_raw(value) -> str:
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    return str(value)


def rows_from_cur_frame(frame: pd.DataFrame) -> Iterator[RawUsageRow]:
    """
    Yield one RawUsageRow per CUR line item. Null cells are left out of the
    row, so a missing required value surfaces as a row-level error later on.
    """
    columns = [column for column in CUR_COLUMN_ALIASES if column in frame.columns]
    absent = sorted(set(CUR_COLUMN_ALIASES) - set(columns))
    if absent:
        logger.warning("cur_frame_missing_columns", columns=absent)

    renamed = frame[columns].rename(columns=CUR_COLUMN_ALIASES)
    for record in renamed.to_dict(orient="records"):
        yield {key: _to_raw(value) for key, value in record.items() if not pd.isna(value)}
