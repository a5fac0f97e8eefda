#!/usr/bin/env python

# stdlib imports
import logging
from json import JSONDecoder
import numpy as np

# local imports
import Thingbaijam_2017

logger = logging.getLogger(__name__)

# Defaults reproduce the original published check of the relation
DEFAULT_AREAS = [1.0, 500.0, 1.0e4, 1.0e5]
DEFAULT_MAGS = [4.0, 6.0, 8.0, 9.0]
DEFAULT_CASES = [[90.0, 'crustal'], [-90.0, 'crustal'], [0.0, 'crustal'], [90.0, 'interface']]


def getScalingRelation(conf):
    '''
    Returns the ScalingRelation class using configuration file input.
    Unknown names fall back to Thingbaijam2017.
    Args:
    - conf: configuration dictionary
    Return:
    - ScalingRelation class object
    '''
    srconf = conf.get('scaling_relation', {})
    name = srconf.get('scalrel', 'Thingbaijam2017')
    if name != 'Thingbaijam2017':
        logger.warning(f'Unknown scaling relation {name}, using Thingbaijam2017')
    scalrel = Thingbaijam_2017.Thingbaijam2017()
    if 'regime' in srconf:
        scalrel.set_regime(srconf['regime'])
    return scalrel


def importConfig(fname):
    '''
    Imports a configuration file into a python dictionary.
    Configuration file format expected is json. Lines beginning with # are ignored.
    Args:
    - fname: filename
    Return:
    - Dictionary with contents of configuration file
    '''
    with open(fname, 'r') as fin:
        text = fin.read()
    ntext = ''
    for l in text.split('\n'):
        l = l.strip()
        if l.startswith('#'):
            continue
        ntext += l
    return JSONDecoder().decode(ntext)


def getTableSettings(conf):
    '''
    Areas, magnitudes and (rake, regime) cases to tabulate, from the 'tables' section
    of the configuration or the defaults.
    Args:
    - conf: configuration dictionary
    Return:
    - areas, mags, cases
    '''
    tconf = conf.get('tables', {})
    areas = [float(a) for a in tconf.get('areas', DEFAULT_AREAS)]
    mags = [float(m) for m in tconf.get('mags', DEFAULT_MAGS)]
    cases = [(rake, regime) for rake, regime in tconf.get('cases', DEFAULT_CASES)]
    return areas, mags, cases


def _value(x):
    # None (rake not known) is tabulated as nan
    return np.nan if x is None else float(x)


def makeMagTable(scalrel, areas, cases):
    '''
    Median magnitude for each area (rows) and (rake, regime) case (columns).
    Note that the scaling relation keeps the last rake and regime.
    Args:
    - scalrel: scaling relation
    - areas: list of areas (km^2)
    - cases: list of (rake, regime)
    Return:
    - numpy array, len(areas) x len(cases)
    '''
    table = np.full((len(areas), len(cases)), np.nan)
    for j, (rake, regime) in enumerate(cases):
        for i, area in enumerate(areas):
            table[i, j] = _value(scalrel.get_median_mag(area, rake, regime))
        logger.info(f'Magnitudes computed for {scalrel.get_description()}')
    return table


def makeAreaTable(scalrel, mags, cases):
    '''
    Median area for each magnitude (rows) and (rake, regime) case (columns).
    Args:
    - scalrel: scaling relation
    - mags: list of magnitudes
    - cases: list of (rake, regime)
    Return:
    - numpy array, len(mags) x len(cases)
    '''
    table = np.full((len(mags), len(cases)), np.nan)
    for j, (rake, regime) in enumerate(cases):
        for i, mag in enumerate(mags):
            table[i, j] = _value(scalrel.get_median_area(mag, rake, regime))
        logger.info(f'Areas computed for {scalrel.get_description()}')
    return table


def makeSigmaTable(scalrel, cases):
    '''
    Magnitude and area standard deviations for each (rake, regime) case.
    Args:
    - scalrel: scaling relation
    - cases: list of (rake, regime)
    Return:
    - numpy array, 2 x len(cases), magnitude sigma then area sigma
    '''
    table = np.full((2, len(cases)), np.nan)
    for j, (rake, regime) in enumerate(cases):
        table[0, j] = _value(scalrel.get_mag_std_dev(rake, regime))
        table[1, j] = _value(scalrel.get_area_std_dev(rake, regime))
    return table


def caseLabel(rake, regime):
    if rake is None:
        return f'{regime}/NA'
    return f'{regime}/{rake:g}'


def formatTable(title, rowlabels, table, cases):
    '''
    Whitespace formatted table with a header line of case labels.
    Args:
    - title: label of the first column
    - rowlabels: labels for each row
    - table: numpy array of values
    - cases: list of (rake, regime), one per column
    Return:
    - string
    '''
    lines = ['%-10s' % title + ''.join(['%18s' % caseLabel(*c) for c in cases])]
    for label, row in zip(rowlabels, table):
        lines.append('%-10s' % label + ''.join(['%18.6g' % v for v in row]))
    return '\n'.join(lines) + '\n'
