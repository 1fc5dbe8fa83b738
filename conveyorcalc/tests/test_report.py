"""
Tests for result tables and the PDF datasheet.
"""
import unittest

from conveyorcalc.engine import calculate
from conveyorcalc.models import ConveyorInput
from conveyorcalc.projects import ProjectInfo
from conveyorcalc.report import create_pdf, result_tables


class TestResultTables(unittest.TestCase):

    def setUp(self):
        self.inp = ConveyorInput(scraper_count=1)
        self.result = calculate(self.inp)
        self.tables = result_tables(self.inp, self.result)

    def test_sections(self):
        self.assertEqual(list(self.tables), ["Design Parameters", "Capacity", "Power", "Tension", "Pulley"])
        for df in self.tables.values():
            self.assertEqual(list(df.columns), ["Parameter", "Value", "Unit"])

    def _value(self, section, parameter):
        df = self.tables[section]
        return df.loc[df["Parameter"] == parameter, "Value"].iloc[0]

    def test_values_come_from_result(self):
        self.assertEqual(self._value("Capacity", "Status"), self.result.capacity.status)
        self.assertAlmostEqual(self._value("Power", "Effective Tension (Te)"), self.result.power.effective_tension)
        self.assertAlmostEqual(self._value("Tension", "T1 (Tight Side)"), self.result.tension.t1)
        self.assertAlmostEqual(self._value("Pulley", "Face Width"), 700.0)
        self.assertEqual(self._value("Design Parameters", "Drive Configuration"), "Head")


class TestCreatePdf(unittest.TestCase):

    def test_pdf_bytes(self):
        inp = ConveyorInput()
        pdf = create_pdf(inp, calculate(inp), ProjectInfo(project_name="Coal Handling", client_name="PT Example"))
        self.assertIsInstance(pdf, bytes)
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_pdf_without_project_info(self):
        inp = ConveyorInput()
        self.assertTrue(create_pdf(inp, calculate(inp)).startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
