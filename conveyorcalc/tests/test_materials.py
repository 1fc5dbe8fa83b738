"""
Tests for the bulk material table.
"""
import unittest

from conveyorcalc.materials import (
    MATERIAL_DATABASE,
    Abrasiveness,
    apply_material,
    get_material_by_name,
    material_names,
)
from conveyorcalc.models import ConveyorInput


class TestMaterials(unittest.TestCase):

    def test_lookup(self):
        sand = get_material_by_name("Sand (Dry)")
        self.assertEqual(sand.density_min, 1440)
        self.assertEqual(sand.abrasiveness, Abrasiveness.VERY_ABRASIVE)
        self.assertIsNone(get_material_by_name("Unobtainium"))

    def test_names_are_unique(self):
        names = material_names()
        self.assertEqual(len(names), len(MATERIAL_DATABASE))
        self.assertEqual(len(set(names)), len(names))

    def test_density_ranges_are_ordered(self):
        for m in MATERIAL_DATABASE:
            with self.subTest(material=m.name):
                self.assertLessEqual(m.density_min, m.typical_density)
                self.assertLessEqual(m.typical_density, m.density_max)

    def test_apply_material(self):
        inp = ConveyorInput(belt_speed=2.5)
        urea = get_material_by_name("Urea Prills")
        applied = apply_material(inp, urea)
        self.assertEqual(applied.material_name, "Urea Prills")
        self.assertEqual(applied.material_density, 740.0)
        self.assertEqual(applied.repose_angle, 28)
        self.assertEqual(applied.surcharge_angle, 15)
        self.assertEqual(applied.belt_speed, 2.5)
        self.assertEqual(inp.material_name, "Coal")


if __name__ == '__main__':
    unittest.main()
