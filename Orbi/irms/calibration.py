import logging
from typing import Iterable

import pandas as pd

from Orbi.irms.bracketing import BracketMatcher
from Orbi.irms.ratios_to_deltas import calc_deltas
from Orbi.irms.records import validate_ratios
from Orbi.irms.replicates import aggregate_replicates
from Orbi.irms.standards import ReferenceStandard, lookup

logger = logging.getLogger(__name__)


class BracketedCalibration:
    def __init__(
            self,
            *,
            ratios: pd.DataFrame,
            standards: dict[str, ReferenceStandard],
            partition_by: Iterable[str] = (),
            replicate_by: Iterable[str] = ('sample', 'isotopocule')
    ):
        self.matcher = BracketMatcher(partition_by)
        self.replicate_by = [replicate_by] if isinstance(replicate_by, str) else list(replicate_by)

        validate_ratios(ratios)
        self.ratios = ratios
        # fail on missing standards before doing any work
        self.standards = lookup(standards, ratios.loc[~ratios['is_reference'], 'isotopocule'])

        self._set_tables()

    def _set_tables(self):
        self.brackets: pd.DataFrame = self.matcher.match(self.ratios)
        self.deltas: pd.DataFrame = calc_deltas(self.brackets, self.standards)

        if all(c in self.deltas.columns for c in self.replicate_by):
            self.summary: pd.DataFrame = aggregate_replicates(self.deltas, self.standards, by=self.replicate_by)
        else:
            logger.warning(f'cannot summarize replicates, missing some of the columns {self.replicate_by}')
            self.summary = None

    @property
    def n_samples(self) -> int:
        return int((~self.ratios['is_reference']).sum())

    @property
    def n_unbracketed(self) -> int:
        return self.n_samples - self.brackets.shape[0]
