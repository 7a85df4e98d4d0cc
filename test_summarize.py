import numpy as np
import pandas as pd
import pytest
from scipy.stats import sem

from Orbi.irms.summarize import assign_sequence, drop_flagged_scans, summarize_scans


@pytest.fixture
def scans():
    return pd.DataFrame({
        'filename': ['f1'] * 6 + ['f2'] * 3,
        'scan': [1, 1, 2, 2, 3, 3, 1, 2, 3],
        'isotopocule': ['M0', '18O', 'M0', '18O', 'M0', '18O', '18O', '18O', '18O'],
        'basepeak': 'M0',
        'ratio': [1., .0060, 1., .0062, 1., .0090, .0061, .0063, .0065],
        'is_outlier': [False, False, False, False, True, True, False, False, False],
        'is_satellite_peak': False,
    })


def test_flagged_scans_are_removed(scans):
    kept = drop_flagged_scans(scans)
    assert kept.shape[0] == 7
    assert not kept['is_outlier'].any()


def test_missing_flag_columns_are_ignored(scans):
    kept = drop_flagged_scans(scans.drop(columns=['is_outlier', 'is_satellite_peak']))
    assert kept.shape[0] == scans.shape[0]


def test_summary_per_file(scans):
    summary = summarize_scans(scans).set_index('filename')
    # basepeak rows and the outlier scan are gone
    assert summary.shape[0] == 2
    assert summary.loc['f1', 'n_scans'] == 2
    assert summary.loc['f1', 'ratio'] == pytest.approx(.0061)
    assert summary.loc['f1', 'ratio_sem'] == pytest.approx(sem([.0060, .0062]))
    assert summary.loc['f2', 'ratio_sem'] == pytest.approx(.0002 / np.sqrt(3))


@pytest.fixture
def sequence():
    return pd.DataFrame({
        'filename': ['f1', 'f2', 'f3'],
        'injection': [1, 2, 3],
        'sample': ['USGS35', 'x', 'USGS35'],
        'is_reference': [True, False, True],
    })


def test_assign_sequence(scans, sequence):
    records = assign_sequence(summarize_scans(scans), sequence)
    assert records['injection'].tolist() == [1, 2]
    assert records['is_reference'].tolist() == [True, False]
    assert records['sample'].tolist() == ['USGS35', 'x']


def test_files_without_sequence_entry_are_dropped(scans, sequence):
    records = assign_sequence(summarize_scans(scans), sequence.iloc[1:])
    assert records['filename'].tolist() == ['f2']
