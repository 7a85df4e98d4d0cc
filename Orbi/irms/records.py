"""Column layout of the tables passed between the processing steps."""
from typing import Iterable

import numpy as np
import pandas as pd

from Orbi.irms.exceptions import RecordSchemaError

# one row per (injection, isotopocule)
RATIO_COLUMNS: tuple[str, ...] = ('injection', 'isotopocule', 'is_reference', 'ratio', 'ratio_sem')

REF_BEFORE_COLUMNS: tuple[str, ...] = ('ref_before_injection', 'ref_before_ratio', 'ref_before_ratio_sem')
REF_AFTER_COLUMNS: tuple[str, ...] = ('ref_after_injection', 'ref_after_ratio', 'ref_after_ratio_sem')
DELTA_COLUMNS: tuple[str, ...] = ('ref_ratio', 'ref_ratio_sem', 'delta', 'delta_sem')

SUMMARY_COLUMNS: tuple[str, ...] = (
    'n', 'ratio_mean', 'ratio_rsd', 'delta_mean', 'delta_sd', 'ratio_corr'
)


def check_columns(df: pd.DataFrame, columns: Iterable[str], table: str = 'table') -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise RecordSchemaError(f'{table} is missing columns {missing}')


def validate_ratios(ratios: pd.DataFrame) -> None:
    """
    Check a ratio table before bracketing.

    Parameters
    ----------
    ratios : pd.DataFrame
        Table with at least the columns in RATIO_COLUMNS.

    Raises
    ------
    RecordSchemaError
        If columns are missing, is_reference is not boolean, injection is not
        integer or any ratio_sem is negative.
    """
    check_columns(ratios, RATIO_COLUMNS, 'ratio table')

    if not pd.api.types.is_bool_dtype(ratios['is_reference']):
        raise RecordSchemaError(
            f'is_reference has to be boolean, got {ratios["is_reference"].dtype}; '
            'tag reference injections when reading the sequence'
        )
    if not pd.api.types.is_integer_dtype(ratios['injection']):
        raise RecordSchemaError(
            f'injection has to be an integer column, got {ratios["injection"].dtype}'
        )
    if np.any(ratios['ratio_sem'] < 0):
        raise RecordSchemaError('ratio_sem has to be non-negative')
