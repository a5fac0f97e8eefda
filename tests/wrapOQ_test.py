import os
import shutil
import tempfile
import unittest
from math import log10

import numpy as np
from numpy.testing import assert_almost_equal

import wrapOQ as woq
import makeMagAreaTables
from Thingbaijam_2017 import Thingbaijam2017, InvalidRegimeError

CONF_TEXT = '''# Calculation configuration
# comment lines are skipped
{
    "scaling_relation": {
        "scalrel": "Thingbaijam2017",
        "regime": "Interface"
    },
    # cases are [rake, regime]
    "tables": {
        "areas": [10.0, 1000.0],
        "mags": [5.0],
        "cases": [[90.0, "crustal"], [null, "crustal"]]
    }
}
'''


class ImportConfigTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.fname = os.path.join(self.tmpdir, 'calc.conf')
        with open(self.fname, 'w') as fout:
            fout.write(CONF_TEXT)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_import(self):
        conf = woq.importConfig(self.fname)
        self.assertEqual(conf['scaling_relation']['scalrel'], 'Thingbaijam2017')
        self.assertEqual(conf['tables']['areas'], [10.0, 1000.0])
        self.assertIsNone(conf['tables']['cases'][1][0])

    def test_table_settings(self):
        conf = woq.importConfig(self.fname)
        areas, mags, cases = woq.getTableSettings(conf)
        self.assertEqual(areas, [10.0, 1000.0])
        self.assertEqual(mags, [5.0])
        self.assertEqual(cases, [(90.0, 'crustal'), (None, 'crustal')])

    def test_table_settings_defaults(self):
        areas, mags, cases = woq.getTableSettings({})
        self.assertEqual(areas, woq.DEFAULT_AREAS)
        self.assertEqual(mags, woq.DEFAULT_MAGS)
        self.assertEqual(len(cases), 4)


class ScalingRelationTestCase(unittest.TestCase):

    def test_default(self):
        scalrel = woq.getScalingRelation({})
        self.assertIsInstance(scalrel, Thingbaijam2017)
        self.assertEqual(scalrel.regime, 'crustal')

    def test_regime(self):
        conf = {'scaling_relation': {'scalrel': 'Thingbaijam2017', 'regime': 'Interface'}}
        self.assertEqual(woq.getScalingRelation(conf).regime, 'interface')

    def test_bad_regime(self):
        conf = {'scaling_relation': {'regime': 'oceanic'}}
        with self.assertRaises(InvalidRegimeError):
            woq.getScalingRelation(conf)

    def test_unknown_name(self):
        conf = {'scaling_relation': {'scalrel': 'WC1994'}}
        with self.assertLogs('wrapOQ', level='WARNING'):
            scalrel = woq.getScalingRelation(conf)
        self.assertIsInstance(scalrel, Thingbaijam2017)


class TablesTestCase(unittest.TestCase):

    def setUp(self):
        self.scalrel = Thingbaijam2017()
        self.areas, self.mags, self.cases = woq.getTableSettings({})

    def test_mag_table(self):
        table = woq.makeMagTable(self.scalrel, self.areas, self.cases)
        self.assertEqual(table.shape, (4, 4))
        # area of 1 km^2 gives the intercepts
        assert_almost_equal(table[0], [4.158, 3.157, 3.701, 3.469])
        assert_almost_equal(table[1, 0], 4.158 + 0.953 * log10(500.))

    def test_area_table(self):
        table = woq.makeAreaTable(self.scalrel, self.mags, self.cases)
        self.assertEqual(table.shape, (4, 4))
        assert_almost_equal(table[1, 3], pow(10., -3.292 + 0.949 * 6.))

    def test_sigma_table(self):
        table = woq.makeSigmaTable(self.scalrel, self.cases)
        assert_almost_equal(table[0], [0.121, 0.181, 0.184, 0.150])
        assert_almost_equal(table[0], table[1])

    def test_undefined_rake_is_nan(self):
        table = woq.makeMagTable(self.scalrel, [500.], [(None, 'interface')])
        self.assertTrue(np.isnan(table[0, 0]))

    def test_format(self):
        text = woq.formatTable('Area', ['1'], np.array([[4.158, np.nan]]),
                               [(90., 'crustal'), (None, 'crustal')])
        lines = text.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertIn('crustal/90', lines[0])
        self.assertIn('crustal/NA', lines[0])
        self.assertIn('4.158', lines[1])
        self.assertIn('nan', lines[1])


class MakeTablesTestCase(unittest.TestCase):

    def test_default_tables(self):
        text = makeMagAreaTables.makeTables({})
        self.assertIn('Area', text)
        self.assertIn('Mag', text)
        self.assertIn('StdDev', text)
        self.assertIn('interface/90', text)
        self.assertEqual(len(text.strip().split('\n\n')), 3)


if __name__ == '__main__':
    unittest.main()
