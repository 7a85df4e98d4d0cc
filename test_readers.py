import pandas as pd
import pytest

from Orbi.readers.isoorbi import IsoOrbiReader, read_isoorbi_exports, read_sequence, read_standards, to_bool


@pytest.fixture
def export(tmp_path):
    df = pd.DataFrame({
        'filename': 'run_01',
        'scan.no': [1, 1, 2, 2],
        'time.min': [.01, .01, .02, .02],
        'isotopocule': ['M0', '15N', 'M0', '15N'],
        'basepeak': 'M0',
        'ratio': [1., .0036, 1., .0037],
        'is_outlier': ['FALSE', 'FALSE', 'TRUE', 'TRUE'],
    })
    path = tmp_path / 'run_01.tsv'
    df.to_csv(path, sep='\t', index=False)
    return str(path)


def test_isoorbi_export(export):
    reader = IsoOrbiReader(export)
    df = reader.data
    assert {'scan', 'time_min'} <= set(df.columns)
    assert df['is_outlier'].tolist() == [False, False, True, True]
    assert reader.metadata['isotopocules'] == ['M0', '15N']
    assert reader.metadata['basepeak'] == ['M0']
    assert reader.metadata['flags'] == ['is_outlier']


def test_filename_from_path(tmp_path):
    path = tmp_path / 'run_02.csv'
    pd.DataFrame({'scan.no': [1], 'isotopocule': ['15N'], 'ratio': [.0036]}).to_csv(path, index=False)
    assert IsoOrbiReader(str(path)).data['filename'].tolist() == ['run_02']


def test_several_exports(export, tmp_path):
    other = tmp_path / 'run_02.tsv'
    df = pd.read_csv(export, sep='\t').assign(filename='run_02')
    df.to_csv(other, sep='\t', index=False)
    scans = read_isoorbi_exports([export, str(other)])
    assert scans['filename'].unique().tolist() == ['run_01', 'run_02']


def test_unsupported_extension(tmp_path):
    path = tmp_path / 'run.raw'
    path.write_bytes(b'')
    with pytest.raises(NotImplementedError):
        IsoOrbiReader(str(path)).data


def test_to_bool():
    assert to_bool(pd.Series(['True', 'no', '1', None]), 'x').tolist() == [True, False, True, False]
    with pytest.raises(ValueError):
        to_bool(pd.Series(['std']), 'x')


def test_sequence_with_reference_names(tmp_path):
    path = tmp_path / 'sequence.xlsx'
    pd.DataFrame({
        'filename': ['a', 'b', 'c'],
        'injection': [1, 2, 3],
        'sample': ['USGS35', 'x', 'USGS35'],
    }).to_excel(path, index=False)
    sequence = read_sequence(str(path), reference_samples=['USGS35'])
    assert sequence['is_reference'].tolist() == [True, False, True]
    assert sequence['is_reference'].dtype == bool


def test_sequence_with_reference_column(tmp_path):
    path = tmp_path / 'sequence.csv'
    pd.DataFrame({'filename': ['a', 'b'], 'injection': [1, 2], 'is_reference': ['yes', 'no']}).to_csv(path, index=False)
    assert read_sequence(str(path))['is_reference'].tolist() == [True, False]


def test_sequence_without_tags(tmp_path):
    path = tmp_path / 'sequence.csv'
    pd.DataFrame({'filename': ['a'], 'injection': [1], 'sample': ['x']}).to_csv(path, index=False)
    with pytest.raises(ValueError):
        read_sequence(str(path))


def test_read_standards(tmp_path):
    path = tmp_path / 'standards.csv'
    pd.DataFrame({'isotopocule': ['18O'], 'delta_known': [57.5]}).to_csv(path, index=False)
    assert read_standards(str(path))['18O'].delta_known == 57.5
