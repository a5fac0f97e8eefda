#!/usr/bin/env python

import sys
import time as time
import argparse
import wrapOQ as woq


def makeTables(calcconf):
    '''
    Tabulate median magnitude from area, median area from magnitude and the
    standard deviations for the configured (rake, regime) cases.
    Args:
        calcconf: calculation configuration dictionary
    Return:
        text of the three tables
    '''
    scalrel = woq.getScalingRelation(calcconf)
    areas, mags, cases = woq.getTableSettings(calcconf)
    text = woq.formatTable('Area', ['%g' % a for a in areas],
            woq.makeMagTable(scalrel, areas, cases), cases)
    text += '\n'
    text += woq.formatTable('Mag', ['%g' % m for m in mags],
            woq.makeAreaTable(scalrel, mags, cases), cases)
    text += '\n'
    text += woq.formatTable('StdDev', ['mag', 'log10area'],
            woq.makeSigmaTable(scalrel, cases), cases)
    return text


if __name__ == "__main__":
    import logging.config
    from DEFLOG import DEFLOG
    DEFLOG['handlers']['fileHandler']['filename'] = \
            'makeMagAreaTables_%s.log' % time.strftime('%y%m%dT%H%M%S', time.gmtime(time.time()))
    logging.config.dictConfig(DEFLOG)

    parser = argparse.ArgumentParser(
        description='Tabulate Thingbaijam et al. (2017) magnitude-area scaling')
    parser.add_argument('--calc', '-c', action='store', required=False, default=None,
        dest='calcconf', help='Calculation configuration file')
    parser.add_argument('--output', '-o', action='store', required=False, default=None,
        dest='output', help='Output file, default is stdout')
    args = parser.parse_args()

    calcconf = {}
    if args.calcconf is not None:
        calcconf = woq.importConfig(args.calcconf)
    text = makeTables(calcconf)
    if args.output is None:
        sys.stdout.write(text)
    else:
        with open(args.output, 'w') as fout:
            fout.write(text)
        logging.info(f'Tables written to {args.output}')
