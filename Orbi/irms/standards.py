import logging

import numpy as np
import pandas as pd

from Orbi.irms.constants import (
    REFERENCE_MATERIALS, DELTA_PERMIL_MIN, DELTA_PERMIL_MAX, FRACTION_SUSPECT_LIMIT
)
from Orbi.irms.exceptions import MissingReferenceStandardError
from Orbi.irms.records import check_columns

logger = logging.getLogger(__name__)


class ReferenceStandard:
    """Known composition of the bracketing standard for one isotopocule (permil)."""
    isotopocule: str = None
    delta_known: float = None
    ratio_known: float | None = None

    def __init__(self, isotopocule: str, delta_known: float, ratio_known: float | None = None):
        self.isotopocule = isotopocule
        self.delta_known = float(delta_known)
        self.ratio_known = None if ratio_known is None else float(ratio_known)

        self._validate()

    def _validate(self):
        d = self.delta_known
        if not np.isfinite(d) or not (DELTA_PERMIL_MIN < d <= DELTA_PERMIL_MAX):
            raise ValueError(
                f'delta_known={d} for {self.isotopocule} is outside of '
                f'({DELTA_PERMIL_MIN}, {DELTA_PERMIL_MAX}], values are expected in permil'
            )
        if 0 < abs(d) < FRACTION_SUSPECT_LIMIT:
            logger.warning(
                f'delta_known={d} for {self.isotopocule} looks like a fraction, '
                f'delta values are expected in permil (e.g. 57.5 instead of 0.0575)'
            )
        if self.ratio_known is not None and not self.ratio_known > 0:
            raise ValueError(f'ratio_known has to be positive, got {self.ratio_known}')

    def __repr__(self):
        return (f'{self.__class__.__name__}({self.isotopocule!r}, delta_known={self.delta_known}, '
                f'ratio_known={self.ratio_known})')

    def __eq__(self, other):
        if not isinstance(other, ReferenceStandard):
            return NotImplemented
        return ((self.isotopocule, self.delta_known, self.ratio_known)
                == (other.isotopocule, other.delta_known, other.ratio_known))


def get_reference_standards(
        material: str,
        ratio_known: dict[str, float] | None = None
) -> dict[str, ReferenceStandard]:
    """
    Standards for all isotopocules certified for a reference material.

    ratio_known optionally maps isotopocule labels to the absolute ratio of the
    standard, which is needed for corrected ratios in the replicate summary.
    """
    if material not in REFERENCE_MATERIALS:
        raise MissingReferenceStandardError(
            f'unknown reference material {material}, choose from {list(REFERENCE_MATERIALS)}'
        )
    ratio_known = ratio_known or {}
    return {
        iso: ReferenceStandard(iso, d, ratio_known.get(iso))
        for iso, d in REFERENCE_MATERIALS[material].items()
    }


def standards_from_table(df: pd.DataFrame) -> dict[str, ReferenceStandard]:
    """Build standards from a table with isotopocule, delta_known and optional ratio_known."""
    check_columns(df, ('isotopocule', 'delta_known'), 'standards table')
    isotopocules = df['isotopocule'].astype(str)
    if isotopocules.duplicated().any():
        raise ValueError(f'duplicate isotopocules in standards table: {isotopocules[isotopocules.duplicated()].tolist()}')

    standards = {}
    for i, iso in enumerate(isotopocules):
        r = df['ratio_known'].iat[i] if 'ratio_known' in df.columns else None
        if r is not None and pd.isna(r):
            r = None
        standards[iso] = ReferenceStandard(iso, df['delta_known'].iat[i], r)
    return standards


def lookup(standards: dict[str, ReferenceStandard], isotopocules) -> dict[str, ReferenceStandard]:
    """Standards for the requested isotopocules, all of them have to be configured."""
    isotopocules = pd.unique(pd.Series(isotopocules, dtype=object))
    missing = [iso for iso in isotopocules if iso not in standards]
    if missing:
        raise MissingReferenceStandardError(
            f'no reference standard configured for isotopocules {missing}'
        )
    return {iso: standards[iso] for iso in isotopocules}
