import logging

import numpy as np
import pandas as pd
import pytest

from Orbi.irms.constants import REFERENCE_MATERIALS
from Orbi.irms.exceptions import MissingReferenceStandardError
from Orbi.irms.standards import ReferenceStandard, get_reference_standards, lookup, standards_from_table


def test_permil_values_are_accepted():
    std = ReferenceStandard('18O', 57.5, .0021)
    assert std.delta_known == 57.5
    assert std.ratio_known == .0021


@pytest.mark.parametrize('d', [-1000., -1500., 20000., np.nan, np.inf])
def test_out_of_range_delta(d):
    with pytest.raises(ValueError):
        ReferenceStandard('18O', d)


def test_fraction_like_delta_is_reported(caplog):
    with caplog.at_level(logging.WARNING):
        ReferenceStandard('18O', .0575)
    assert 'looks like a fraction' in caplog.text


def test_zero_delta_is_not_reported(caplog):
    with caplog.at_level(logging.WARNING):
        ReferenceStandard('18O', 0.)
    assert caplog.text == ''


def test_non_positive_ratio_known():
    with pytest.raises(ValueError):
        ReferenceStandard('18O', 57.5, 0.)


def test_reference_material():
    standards = get_reference_standards('USGS35', ratio_known={'18O': .0063})
    assert set(standards) == set(REFERENCE_MATERIALS['USGS35'])
    assert standards['18O'] == ReferenceStandard('18O', 57.5, .0063)
    assert standards['15N'].ratio_known is None


def test_unknown_reference_material():
    with pytest.raises(MissingReferenceStandardError):
        get_reference_standards('NBS-0')


def test_standards_from_table():
    df = pd.DataFrame({'isotopocule': ['18O', '15N'], 'delta_known': [57.5, 2.7], 'ratio_known': [.0063, np.nan]})
    standards = standards_from_table(df)
    assert standards['18O'].ratio_known == .0063
    assert standards['15N'].ratio_known is None


def test_duplicate_isotopocules_in_table():
    df = pd.DataFrame({'isotopocule': ['18O', '18O'], 'delta_known': [57.5, 25.6]})
    with pytest.raises(ValueError):
        standards_from_table(df)


def test_lookup_reports_all_missing():
    standards = get_reference_standards('USGS35')
    with pytest.raises(MissingReferenceStandardError, match='13C'):
        lookup(standards, ['18O', '13C', '13C'])
    assert list(lookup(standards, ['18O', '18O'])) == ['18O']
