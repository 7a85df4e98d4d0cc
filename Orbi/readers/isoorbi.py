import logging
from typing import Iterable

import pandas as pd
from tqdm import tqdm

from Orbi.irms.constants import FLAG_COLUMNS
from Orbi.irms.records import check_columns
from Orbi.irms.standards import ReferenceStandard, standards_from_table
from Orbi.readers.base import ReaderBaseClass, read_table

logger = logging.getLogger(__name__)

# isoorbi column names to the ones used here
COLUMN_NAMES: dict[str, str] = {
    'scan.no': 'scan',
    'time.min': 'time_min',
    'it.ms': 'integration_time_ms',
    'ions.incremental': 'ions',
}

_TRUE = ('true', 't', 'yes', 'y', '1')
_FALSE = ('false', 'f', 'no', 'n', '0', '')


def to_bool(values: pd.Series, name: str = 'column') -> pd.Series:
    """Parse an explicit true/false column (e.g. from excel or csv) into booleans."""
    if pd.api.types.is_bool_dtype(values):
        return values.astype(bool)
    lowered = values.fillna('').astype(str).str.strip().str.lower()
    unknown = ~lowered.isin(_TRUE + _FALSE)
    if unknown.any():
        raise ValueError(f'cannot interpret {sorted(set(values[unknown]))} in {name} as true/false')
    return lowered.isin(_TRUE)


class IsoOrbiReader(ReaderBaseClass):
    """Per-scan ratios exported by isoorbi after flagging and ratio calculation."""

    def __init__(self, path_file: str, **kwargs):
        super().__init__(path_file)
        self._read_kwargs = kwargs

    def _read_data(self):
        df = read_table(self.path_file, **self._read_kwargs)
        df = df.rename(columns=COLUMN_NAMES)
        if 'filename' not in df.columns:
            df['filename'] = self.filename
        check_columns(df, ('filename', 'scan', 'isotopocule', 'ratio'), self.path_file)

        df['isotopocule'] = df['isotopocule'].astype(str)
        for flag in FLAG_COLUMNS:
            if flag in df.columns:
                df[flag] = to_bool(df[flag], flag)
        self._data = df

    def _read_metadata(self):
        df = self.data
        self._metadata = {
            'path_file': self.path_file,
            'files': df['filename'].unique().tolist(),
            'isotopocules': df['isotopocule'].unique().tolist(),
            'basepeak': df['basepeak'].unique().tolist() if 'basepeak' in df.columns else None,
            'n_scans': int(df['scan'].nunique()),
            'flags': [f for f in FLAG_COLUMNS if f in df.columns],
        }


def read_isoorbi_exports(path_files: Iterable[str], **kwargs) -> pd.DataFrame:
    """Read several isoorbi exports into one scan table."""
    path_files = list(path_files)
    dfs = [IsoOrbiReader(f, **kwargs).data for f in tqdm(path_files, 'reading isoorbi exports ...')]
    logger.info(f'read {len(dfs)} files')
    return pd.concat(dfs, ignore_index=True)


def read_sequence(path_file: str, reference_samples: Iterable[str] | None = None, **kwargs) -> pd.DataFrame:
    """
    Read the run sequence (filename, injection, sample and optionally is_reference).

    Reference injections are tagged here and nowhere else: either the table has an
    is_reference column of true/false values or reference_samples names the
    samples that are reference standards.
    """
    df = read_table(path_file, **kwargs)
    check_columns(df, ('filename', 'injection'), 'sequence table')
    df['injection'] = df['injection'].astype(int)

    if reference_samples is not None:
        check_columns(df, ('sample',), 'sequence table')
        reference_samples = list(reference_samples)
        assert df['sample'].isin(reference_samples).any(), \
            f'none of {reference_samples} found in column sample of {path_file}'
        df['is_reference'] = df['sample'].isin(reference_samples)
    elif 'is_reference' in df.columns:
        df['is_reference'] = to_bool(df['is_reference'], 'is_reference')
    else:
        raise ValueError('tag reference injections with an is_reference column or reference_samples')
    return df


def read_standards(path_file: str, **kwargs) -> dict[str, ReferenceStandard]:
    """Read a table with isotopocule, delta_known (permil) and optional ratio_known."""
    return standards_from_table(read_table(path_file, **kwargs))
