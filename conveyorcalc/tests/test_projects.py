"""
Tests for the file-backed project store.
"""
import tempfile
import unittest
from pathlib import Path

from conveyorcalc.engine import calculate
from conveyorcalc.models import ConveyorInput
from conveyorcalc.projects import ProjectInfo, ProjectStore


class TestProjectStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "projects.json"
        self.store = ProjectStore(self.path)
        self.inp = ConveyorInput(design_capacity=300.0)
        self.info = ProjectInfo(project_name="Coal Handling", client_name="PT Example", engineer="A. Engineer")

    def tearDown(self):
        self._tmp.cleanup()

    def test_empty_store(self):
        self.assertEqual(self.store.all(), [])
        self.assertIsNone(self.store.get("proj_missing"))

    def test_save_and_get(self):
        project = self.store.save(self.info, self.inp, calculate(self.inp))
        self.assertTrue(project.id.startswith("proj_"))
        self.assertEqual(project.created_at, project.updated_at)

        loaded = self.store.get(project.id)
        self.assertEqual(loaded.name, "Coal Handling")
        self.assertEqual(loaded.client, "PT Example")
        self.assertEqual(loaded.info.engineer, "A. Engineer")
        self.assertEqual(loaded.conveyor_input, self.inp)
        self.assertEqual(loaded.data["result"]["tension"]["t1"], calculate(self.inp).tension.t1)

    def test_ids_are_unique(self):
        a = self.store.save(self.info, self.inp)
        b = self.store.save(self.info, self.inp)
        self.assertNotEqual(a.id, b.id)
        self.assertEqual(len(self.store.all()), 2)

    def test_update_input_drops_stale_result(self):
        project = self.store.save(self.info, self.inp, calculate(self.inp))
        changed = ConveyorInput(design_capacity=500.0)
        updated = self.store.update(project.id, inp=changed)
        self.assertEqual(updated.conveyor_input, changed)
        self.assertIsNone(self.store.get(project.id).data["result"])

    def test_update_info(self):
        project = self.store.save(self.info, self.inp)
        self.store.update(project.id, info=ProjectInfo(project_name="Renamed"))
        self.assertEqual(self.store.get(project.id).name, "Renamed")

    def test_update_missing(self):
        self.assertIsNone(self.store.update("proj_missing", info=self.info))

    def test_delete(self):
        project = self.store.save(self.info, self.inp)
        self.assertTrue(self.store.delete(project.id))
        self.assertFalse(self.store.delete(project.id))
        self.assertEqual(self.store.all(), [])

    def test_clear(self):
        self.store.save(self.info, self.inp)
        self.store.clear()
        self.assertFalse(self.path.exists())
        self.store.clear()

    def test_corrupt_file_reads_as_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("conveyorcalc.projects", level="WARNING"):
            self.assertEqual(self.store.all(), [])


if __name__ == '__main__':
    unittest.main()
