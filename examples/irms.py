import logging

from Orbi.irms.calibration import BracketedCalibration
from Orbi.irms.constants import R18_VSMOW, REFERENCE_MATERIALS
from Orbi.irms.standards import get_reference_standards
from Orbi.irms.summarize import summarize_scans, assign_sequence
from Orbi.readers.isoorbi import read_isoorbi_exports, read_sequence

logging.basicConfig(level=logging.INFO)

files = [
    ...  # your isoorbi exports here
]

print('reading scans')
scans = read_isoorbi_exports(files)

print('summarizing scans')
ratios = summarize_scans(scans, by=('filename', 'basepeak', 'isotopocule'))

print('assigning sequence')
# sample names of the bracketing standard tag the reference injections
sequence = read_sequence('your/sequence.xlsx', reference_samples=['USGS35'])
ratios = assign_sequence(ratios, sequence)

print('calculating delta values')
# nitrate 18O ratio of USGS35 to the basepeak, needed for ratio_corr only
ratio_18O = 3 * R18_VSMOW * (REFERENCE_MATERIALS['USGS35']['18O'] / 1000 + 1)
standards = get_reference_standards('USGS35', ratio_known={'18O': ratio_18O})
cal = BracketedCalibration(ratios=ratios, standards=standards, partition_by=['basepeak'])

print(f'{cal.n_unbracketed} of {cal.n_samples} sample records not bracketed')

df = cal.deltas.copy()
summary = cal.summary.copy()

df.to_excel('your/path/deltas.xlsx')
summary.to_excel('your/path/summary.xlsx')
