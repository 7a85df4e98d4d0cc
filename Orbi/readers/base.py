import os
from typing import Any

import pandas as pd


def read_table(path_file: str, **kwargs) -> pd.DataFrame:
    """Read csv, tsv or excel (openpyxl) files depending on the file extension."""
    ext = os.path.splitext(path_file)[1].lower()
    if ext in ('.xlsx', '.xlsm'):
        return pd.read_excel(path_file, engine='openpyxl', **kwargs)
    if ext in ('.tsv', '.txt', '.isox'):
        return pd.read_csv(path_file, sep='\t', **kwargs)
    if ext == '.csv':
        return pd.read_csv(path_file, **kwargs)
    raise NotImplementedError(f'cannot read files of type {ext} ({path_file})')


class ReaderBaseClass:
    path_file: str = None

    # set lazy
    _data: pd.DataFrame = None
    _metadata: dict[str, Any] = None

    def __init__(self, path_file: str):
        assert os.path.exists(path_file), f'{path_file} does not exist'
        self.path_file: str = path_file

    @property
    def filename(self) -> str:
        return os.path.basename(self.path_file).split('.')[0]

    def _read_data(self, *args, **kwargs):
        """Sets _data. Needs to be implemented by children"""
        raise NotImplementedError()

    def _read_metadata(self, *args, **kwargs):
        """Sets _metadata. Needs to be implemented by children"""
        raise NotImplementedError()

    @property
    def data(self) -> pd.DataFrame:
        if self._data is None:
            self._read_data()
        return self._data

    @property
    def metadata(self) -> dict[str, Any]:
        if self._metadata is None:
            self._read_metadata()
        return self._metadata
