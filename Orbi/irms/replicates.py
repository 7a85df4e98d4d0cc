import logging
from typing import Iterable

import numpy as np
import pandas as pd

from Orbi.irms.records import SUMMARY_COLUMNS, check_columns
from Orbi.irms.standards import ReferenceStandard

logger = logging.getLogger(__name__)


def aggregate_replicates(
        deltas: pd.DataFrame,
        standards: dict[str, ReferenceStandard] | None = None,
        by: Iterable[str] = ('sample', 'isotopocule')
) -> pd.DataFrame:
    """
    Summarize replicate injections of the same sample.

    Standard deviations are sample standard deviations (ddof=1) and therefore
    NaN for single injections. ratio_rsd is unitless (sd / mean).
    ratio_corr is the absolute ratio implied by the mean delta value and the
    ratio_known of the standard; NaN where ratio_known is not configured.
    """
    by = [by] if isinstance(by, str) else list(by)
    check_columns(deltas, by + ['ratio', 'delta'], 'delta table')

    summary = (
        deltas.groupby(by, sort=False, dropna=False)
        .agg(
            n=('delta', 'size'),
            ratio_mean=('ratio', 'mean'),
            ratio_sd=('ratio', 'std'),
            delta_mean=('delta', 'mean'),
            delta_sd=('delta', 'std'),
        )
        .reset_index()
    )
    summary['ratio_rsd'] = summary['ratio_sd'] / summary['ratio_mean']

    ratio_known = np.nan
    if standards and 'isotopocule' in summary.columns:
        ratio_known = summary['isotopocule'].map(
            {iso: std.ratio_known for iso, std in standards.items()}
        ).astype(float)
    elif standards:
        logger.warning('cannot assign ratio_known without grouping by isotopocule')
    summary['ratio_corr'] = (summary['delta_mean'] / 1e3 + 1) * ratio_known

    return summary.loc[:, by + list(SUMMARY_COLUMNS)]
