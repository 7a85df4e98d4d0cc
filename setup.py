from setuptools import setup, find_namespace_packages
import codecs
import os

here = os.path.abspath(os.path.dirname(__file__))

with codecs.open(os.path.join(here, "README.md"), encoding="utf-8") as fh:
    long_description = "\n" + fh.read()

VERSION = '0.1.0'
DESCRIPTION = 'Bracketed delta values for Orbitrap isotopocule ratios'
LONG_DESCRIPTION = 'Summarize isoorbi scan ratios, calibrate them against bracketing reference standards ' \
                   'and aggregate replicate delta values.'

# Setting up
setup(
    name="OrbiDelta",
    version=VERSION,
    author="Yannick Zander",
    author_email="yzander@marum.de",
    description=DESCRIPTION,
    long_description_content_type="text/markdown",
    long_description=long_description,
    packages=find_namespace_packages(include=['Orbi', 'Orbi.*']),
    install_requires=['numpy', 'pandas', 'scipy', 'tqdm', 'openpyxl'],
    extras_require={'dev': 'twine', 'test': ['pytest']},
    keywords=['python', 'Orbitrap', 'IRMS', 'isotopocule', 'delta', 'bracketing'],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
    ]
)
