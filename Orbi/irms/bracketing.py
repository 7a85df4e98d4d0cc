"""
Bracketing
----------
A sample injection i is calibrated against the reference injections measured
directly before (i - 1) and after (i + 1) it. Matching is by exact injection
adjacency inside one partition of the table. The partition is always split by
isotopocule and optionally by further columns (tuning, basepeak, ...) that
separate otherwise colliding injection numbers.

Samples without a reference on both sides are dropped and never extrapolated.
"""
import logging
from typing import Iterable

import pandas as pd

from Orbi.irms.exceptions import AmbiguousBracketError
from Orbi.irms.records import (
    RATIO_COLUMNS, REF_BEFORE_COLUMNS, REF_AFTER_COLUMNS, check_columns, validate_ratios
)

logger = logging.getLogger(__name__)

# columns holding values of a record, these cannot separate partitions
_VALUE_COLUMNS = ('injection', 'is_reference', 'ratio', 'ratio_sem')


class BracketMatcher:
    match_key: tuple[str, ...] = None

    def __init__(self, partition_by: Iterable[str] = ()):
        if isinstance(partition_by, str):
            partition_by = (partition_by,)
        partition_by = tuple(partition_by)

        for col in partition_by:
            if not isinstance(col, str) or not col:
                raise ValueError(f'partition columns have to be non-empty strings, got {col!r}')
            if col in _VALUE_COLUMNS:
                raise ValueError(f'{col} is a record value and cannot be used to partition')
        if len(set(partition_by)) != len(partition_by):
            raise ValueError(f'duplicate partition columns in {partition_by}')

        key = ('isotopocule',) + tuple(c for c in partition_by if c != 'isotopocule')
        self.match_key = key

    def __repr__(self):
        return f'{self.__class__.__name__}(match_key={self.match_key})'

    def _references(self, ratios: pd.DataFrame, columns: tuple[str, str, str]) -> pd.DataFrame:
        refs = ratios.loc[ratios['is_reference'], list(self.match_key) + ['injection', 'ratio', 'ratio_sem']]
        return refs.rename(columns=dict(zip(('injection', 'ratio', 'ratio_sem'), columns)))

    def _join_side(
            self,
            samples: pd.DataFrame,
            refs: pd.DataFrame,
            offset: int,
            injection_column: str
    ) -> pd.DataFrame:
        # every reference with the adjacent injection number in the same
        # partition joins, duplicates fan out and are caught afterwards
        key = list(self.match_key)
        samples = samples.assign(_adjacent=samples['injection'] + offset)
        joined = samples.merge(
            refs,
            left_on=key + ['_adjacent'],
            right_on=key + [injection_column],
            how='inner'
        )
        joined = joined.drop(columns='_adjacent')

        ambiguous = joined['_sample_row'].duplicated(keep=False)
        if ambiguous.any():
            rows = joined.loc[ambiguous, key + ['injection', injection_column]]
            raise AmbiguousBracketError(
                f'{ambiguous.sum()} candidate pairings share a sample, duplicate injection '
                f'numbers within one partition of {self.match_key}:\n{rows.to_string(index=False)}'
            )
        return joined

    def match(self, ratios: pd.DataFrame) -> pd.DataFrame:
        """
        Pair every sample record with the reference records directly before
        and after it.

        Parameters
        ----------
        ratios : pd.DataFrame
            Ratio table (see Orbi.irms.records.RATIO_COLUMNS) with all columns of
            the match key.

        Returns
        -------
        pd.DataFrame
            One row per bracketed sample record. All sample columns except
            is_reference are kept and the ref_before_* and ref_after_* columns
            are added. Rows are in the order of the input table.
        """
        validate_ratios(ratios)
        check_columns(ratios, self.match_key, 'ratio table')

        # injection numbers are unique within one partition
        duplicated = ratios.duplicated(list(self.match_key) + ['injection'], keep=False)
        if duplicated.any():
            rows = ratios.loc[duplicated, list(self.match_key) + ['injection', 'is_reference']]
            raise AmbiguousBracketError(
                f'duplicate injection numbers within one partition of {self.match_key}:\n'
                f'{rows.to_string(index=False)}'
            )

        ratios = ratios.reset_index(drop=True)
        samples = ratios.loc[~ratios['is_reference']].drop(columns='is_reference')
        samples = samples.assign(_sample_row=samples.index)

        joined = self._join_side(
            samples, self._references(ratios, REF_BEFORE_COLUMNS), -1, REF_BEFORE_COLUMNS[0]
        )
        joined = self._join_side(
            joined, self._references(ratios, REF_AFTER_COLUMNS), 1, REF_AFTER_COLUMNS[0]
        )

        n_dropped = samples.shape[0] - joined.shape[0]
        if n_dropped:
            logger.info(f'dropped {n_dropped} of {samples.shape[0]} sample records without bracketing references')

        joined = joined.sort_values('_sample_row').drop(columns='_sample_row').reset_index(drop=True)
        # partition and record columns first, then anything else the samples carried
        first = list(self.match_key) + [c for c in RATIO_COLUMNS if c not in self.match_key and c != 'is_reference']
        refs = list(REF_BEFORE_COLUMNS) + list(REF_AFTER_COLUMNS)
        rest = [c for c in joined.columns if c not in first and c not in refs]
        return joined.loc[:, first + rest + refs]


def match_brackets(ratios: pd.DataFrame, partition_by: Iterable[str] = ()) -> pd.DataFrame:
    return BracketMatcher(partition_by).match(ratios)
