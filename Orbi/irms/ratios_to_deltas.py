"""
Theory
------
Notation: R is the measured ratio of an isotopocule to the basepeak, s(R) its
standard error. The sample (R, s_R) is measured between two injections of a
reference standard (R_b, s_b) and (R_a, s_a). Drift of the instrument is
corrected by comparing the sample to the mean of its brackets
    R_ref = (R_b + R_a) / 2
    s_ref = 1 / 2 * sqrt(s_b ** 2 + s_a ** 2)

The delta value of the sample relative to the reference standard is
    delta_sam,ref / permil = 1000 * (R / R_ref - 1)
The standard itself is known on the international scale (delta_ref in permil).
Chaining both
    (delta_sam + 1000) = (delta_sam,ref + 1000) * (delta_ref + 1000) / 1000
gives the calibrated delta of the sample
    delta_sam = R / R_ref * (delta_ref + 1000) - 1000

Uncertainties of R and R_ref are independent and combined in quadrature as
relative errors; the sensitivity of delta to a relative ratio error is
(delta + 1000):
    s(delta_sam) = (delta_sam + 1000) * sqrt((s_R / R) ** 2 + (s_ref / R_ref) ** 2)
"""
import numpy as np
import pandas as pd

from Orbi.irms.exceptions import NonPositiveRatioError
from Orbi.irms.records import REF_BEFORE_COLUMNS, REF_AFTER_COLUMNS, check_columns
from Orbi.irms.standards import ReferenceStandard, lookup


def bracket_mean(
        R_before: float | np.ndarray | pd.Series,
        R_after: float | np.ndarray | pd.Series
) -> float | np.ndarray | pd.Series:
    return (R_before + R_after) / 2


def bracket_sem(
        s_before: float | np.ndarray | pd.Series,
        s_after: float | np.ndarray | pd.Series
) -> float | np.ndarray | pd.Series:
    return .5 * np.sqrt(s_before ** 2 + s_after ** 2)


def _check_positive(name: str, R) -> None:
    # NaN fails as well
    if not np.all(np.asarray(R) > 0):
        raise NonPositiveRatioError(f'{name} has to be positive, delta values are undefined otherwise')


def delta(
        R_sample: float | np.ndarray | pd.Series,
        R_ref: float | np.ndarray | pd.Series,
        delta_ref: float | np.ndarray | pd.Series
) -> float | np.ndarray | pd.Series:
    """Calibrated delta (permil) of a sample from its ratio to the bracketing standard."""
    _check_positive('ratio', R_sample)
    _check_positive('ref_ratio', R_ref)
    return R_sample / R_ref * (delta_ref + 1e3) - 1e3


def delta_sem(
        delta_sample: float | np.ndarray | pd.Series,
        R_sample: float | np.ndarray | pd.Series,
        s_sample: float | np.ndarray | pd.Series,
        R_ref: float | np.ndarray | pd.Series,
        s_ref: float | np.ndarray | pd.Series
) -> float | np.ndarray | pd.Series:
    _check_positive('ratio', R_sample)
    _check_positive('ref_ratio', R_ref)
    return (delta_sample + 1e3) * np.sqrt((s_sample / R_sample) ** 2 + (s_ref / R_ref) ** 2)


def calc_deltas(brackets: pd.DataFrame, standards: dict[str, ReferenceStandard]) -> pd.DataFrame:
    """
    Add bracketing reference ratio and calibrated delta values to matched brackets.

    Parameters
    ----------
    brackets : pd.DataFrame
        Output of Orbi.irms.bracketing.match_brackets.
    standards : dict[str, ReferenceStandard]
        Reference standard per isotopocule, delta_known in permil.

    Returns
    -------
    pd.DataFrame
        Copy of brackets with ref_ratio, ref_ratio_sem, delta and delta_sem.
    """
    check_columns(
        brackets,
        ('isotopocule', 'ratio', 'ratio_sem') + REF_BEFORE_COLUMNS + REF_AFTER_COLUMNS,
        'brackets table'
    )
    used = lookup(standards, brackets['isotopocule'])
    delta_ref = brackets['isotopocule'].map({iso: std.delta_known for iso, std in used.items()}).astype(float)

    df = brackets.copy()
    df['ref_ratio'] = bracket_mean(df['ref_before_ratio'], df['ref_after_ratio'])
    df['ref_ratio_sem'] = bracket_sem(df['ref_before_ratio_sem'], df['ref_after_ratio_sem'])
    df['delta'] = delta(df['ratio'], df['ref_ratio'], delta_ref)
    df['delta_sem'] = delta_sem(df['delta'], df['ratio'], df['ratio_sem'], df['ref_ratio'], df['ref_ratio_sem'])
    return df
