import math
import unittest

from pipeline.reconcile import reconcile, reconcile_one
from sizebot.domain import DELETED_RATIO, NEW_FILE_RATIO, Measurement, change_ratio


def _m(size: int, gz: int) -> Measurement:
    return Measurement.present(size, gz)


class TestReconcile(unittest.TestCase):
    def test_both_present_uses_exact_division(self) -> None:
        rec = reconcile_one("a.js", _m(1000, 400), _m(1050, 410))
        self.assertIsNotNone(rec)
        self.assertEqual((1050 - 1000) / 1000, rec.size_change_ratio)
        self.assertEqual((410 - 400) / 400, rec.compressed_change_ratio)
        self.assertEqual((1000, 1050, 400, 410), (rec.base_size, rec.head_size, rec.base_compressed_size, rec.head_compressed_size))

    def test_head_only_is_new_file(self) -> None:
        rec = reconcile_one("new.js", Measurement.absent(), _m(500, 200))
        self.assertTrue(math.isinf(rec.size_change_ratio) and rec.size_change_ratio > 0)
        self.assertEqual(NEW_FILE_RATIO, rec.compressed_change_ratio)
        self.assertEqual((0, 0), (rec.base_size, rec.base_compressed_size))
        self.assertTrue(rec.is_new)

    def test_base_only_is_deleted(self) -> None:
        rec = reconcile_one("gone.js", _m(500, 200), Measurement.absent())
        self.assertEqual(DELETED_RATIO, rec.size_change_ratio)
        self.assertEqual(-1.0, rec.compressed_change_ratio)
        self.assertEqual((0, 0), (rec.head_size, rec.head_compressed_size))
        self.assertTrue(rec.is_deleted)

    def test_zero_base_size_is_treated_as_new(self) -> None:
        rec = reconcile_one("empty.js", _m(0, 20), _m(100, 60))
        self.assertEqual(NEW_FILE_RATIO, rec.size_change_ratio)
        # Compressed sizes are reconciled independently.
        self.assertEqual((60 - 20) / 20, rec.compressed_change_ratio)

    def test_absent_on_both_sides_creates_no_record(self) -> None:
        self.assertIsNone(reconcile_one("x.js", Measurement.absent(), Measurement.absent()))

    def test_reconcile_covers_every_path_once_in_path_order(self) -> None:
        measurements = {
            "b.js": (_m(100, 50), _m(100, 50)),
            "a.js": (Measurement.absent(), _m(10, 5)),
            "c.js": (_m(10, 5), Measurement.absent()),
            "ghost.js": (Measurement.absent(), Measurement.absent()),
        }
        records = reconcile(measurements)
        self.assertEqual(["a.js", "b.js", "c.js"], [r.path for r in records])
        self.assertEqual(0.0, records[1].size_change_ratio)

    def test_change_ratio_helper(self) -> None:
        self.assertEqual(-0.5, change_ratio(200, 100))
        self.assertEqual(NEW_FILE_RATIO, change_ratio(0, 0))


if __name__ == "__main__":
    unittest.main()
