import pandas as pd
from pathlib import Path
from typing import Union
from . import log

logger = log.logger

def write_caar_csv(table: pd.DataFrame, file_path: Union[str, Path]) -> Path:
    """
    Write a day-indexed CAAR table (Day,Beat,Meet,Miss) to CSV.

    Days where a group has no value are left blank.
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    table.to_csv(path, index=True, index_label='Day', na_rep='')
    logger.info(f"CAAR data exported to {path}")
    return path
