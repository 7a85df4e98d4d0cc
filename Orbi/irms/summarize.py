import logging
from typing import Iterable

import numpy as np
import pandas as pd
from scipy.stats import sem

from Orbi.irms.constants import FLAG_COLUMNS
from Orbi.irms.records import check_columns

logger = logging.getLogger(__name__)


def drop_flagged_scans(scans: pd.DataFrame, flags: Iterable[str] = FLAG_COLUMNS) -> pd.DataFrame:
    """Remove scans with any of the quality flags set. Missing flag columns are ignored."""
    flags = [f for f in flags if f in scans.columns]
    if not flags:
        return scans.copy()
    mask = scans.loc[:, flags].fillna(False).astype(bool).any(axis=1)
    if mask.any():
        counts = {f: int(scans[f].fillna(False).astype(bool).sum()) for f in flags}
        logger.warning(f'removing {mask.sum()} of {scans.shape[0]} scans by flags {counts}')
    return scans.loc[~mask].copy()


def summarize_scans(
        scans: pd.DataFrame,
        by: Iterable[str] = ('filename', 'isotopocule'),
        flags: Iterable[str] = FLAG_COLUMNS
) -> pd.DataFrame:
    """
    Mean ratio and its standard error for each file and isotopocule.

    Parameters
    ----------
    scans : pd.DataFrame
        Per-scan ratios with the columns in by and ratio. If a basepeak column
        exists, rows of the basepeak itself (ratio 1 by definition) are left out.
    by : Iterable[str], optional
        Grouping columns. The default is ('filename', 'isotopocule').
    flags : Iterable[str], optional
        Boolean flag columns, flagged scans are excluded.

    Returns
    -------
    pd.DataFrame
        by columns plus ratio, ratio_sem and n_scans.
    """
    by = [by] if isinstance(by, str) else list(by)
    check_columns(scans, by + ['ratio'], 'scan table')

    scans = drop_flagged_scans(scans, flags)
    if 'basepeak' in scans.columns and 'isotopocule' in scans.columns:
        scans = scans.loc[scans['isotopocule'] != scans['basepeak']]
    scans = scans.loc[np.isfinite(scans['ratio'])]

    summary = (
        scans.groupby(by, sort=False)['ratio']
        .agg(ratio='mean', ratio_sem=lambda r: sem(r, ddof=1), n_scans='size')
        .reset_index()
    )
    logger.info(f'summarized {scans.shape[0]} scans into {summary.shape[0]} records')
    return summary


def assign_sequence(summary: pd.DataFrame, sequence: pd.DataFrame, on: str = 'filename') -> pd.DataFrame:
    """
    Attach injection order, sample names and reference tags of the run sequence.

    The sequence table needs the columns on, injection and is_reference (bool),
    see Orbi.readers.isoorbi.read_sequence. Files missing in the sequence are
    dropped with a warning.
    """
    check_columns(summary, (on,), 'summary table')
    check_columns(sequence, (on, 'injection', 'is_reference'), 'sequence table')
    assert not sequence[on].duplicated().any(), f'{on} has to be unique in the sequence table'

    unknown = set(summary[on]) - set(sequence[on])
    if unknown:
        logger.warning(f'no sequence entry for {sorted(unknown)}, dropping them')

    cols = [on, 'injection', 'is_reference'] + [c for c in ('sample',) if c in sequence.columns]
    records = summary.merge(sequence.loc[:, cols], on=on, how='inner')
    sort_by = ['injection'] + [c for c in ('isotopocule',) if c in records.columns]
    return records.sort_values(sort_by, ignore_index=True)
