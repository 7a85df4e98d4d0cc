"""
Unit convention
---------------
All delta values in this package are given in per mille (‰):
    delta / permil = 1000 * (R_sample / R_standard - 1)
Reference materials are therefore listed with e.g. 57.5 and not 0.0575.
"""
# international ratio scales
R13_VPDB: float = 0.011180
R15_AIR: float = 0.0036765
R17_VSMOW: float = 0.0003799
R18_VSMOW: float = 0.0020052
R2_VSMOW: float = 0.00015576
R33_VCDT: float = 0.0078772
R34_VCDT: float = 0.0441626

R2STD: dict[str, float] = {
    '13C': R13_VPDB,
    '15N': R15_AIR,
    '17O': R17_VSMOW,
    '18O': R18_VSMOW,
    '2H': R2_VSMOW,
    '33S': R33_VCDT,
    '34S': R34_VCDT,
}

# certified delta values (permil) of reference materials
REFERENCE_MATERIALS: dict[str, dict[str, float]] = {
    'USGS32': {'15N': 180., '18O': 25.7},
    'USGS34': {'15N': -1.8, '18O': -27.9},
    'USGS35': {'15N': 2.7, '18O': 57.5},
    'IAEA-NO-3': {'15N': 4.7, '18O': 25.6},
}

# delta_known has to be inside these bounds (permil)
DELTA_PERMIL_MIN: float = -1000.
DELTA_PERMIL_MAX: float = 10000.
# non-zero values below this magnitude look like fractions
FRACTION_SUSPECT_LIMIT: float = 1.

# boolean flags set by isoorbi, scans with any flag are excluded
FLAG_COLUMNS: tuple[str, ...] = ('is_outlier', 'is_satellite_peak', 'is_weak_isotopocule')
