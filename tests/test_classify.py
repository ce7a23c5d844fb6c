import unittest

from pipeline.classify import classify, exceeds, sort_by_ratio_desc
from sizebot.domain import DELETED_RATIO, NEW_FILE_RATIO, ArtifactRecord, ThresholdConfig
from sizebot.errors import MissingCriticalArtifact


def _rec(path: str, base: int, head: int) -> ArtifactRecord:
    if base == 0:
        ratio = NEW_FILE_RATIO
    elif head == 0:
        ratio = DELETED_RATIO
    else:
        ratio = (head - base) / base
    return ArtifactRecord(
        path=path,
        base_size=base,
        head_size=head,
        base_compressed_size=base // 2,
        head_compressed_size=head // 2,
        size_change_ratio=ratio,
        compressed_change_ratio=ratio,
    )


class TestClassify(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [
            _rec("big-grow.js", 1000, 1100),  # +10%
            _rec("deleted.js", 1000, 0),
            _rec("pinned-b.js", 1000, 1000),  # unchanged
            _rec("small-grow.js", 1000, 1005),  # +0.5%
            _rec("new.js", 0, 300),
            _rec("pinned-a.js", 1000, 1001),  # +0.1%
            _rec("shrink.js", 1000, 950),  # -5%
            _rec("tiny.js", 1000, 1001),  # +0.1%
        ]
        self.thresholds = ThresholdConfig(
            critical_threshold=0.02,
            significance_threshold=0.002,
            always_critical_paths=["pinned-b.js", "pinned-a.js"],
        )

    def test_always_critical_first_in_declared_order(self) -> None:
        result = classify(self.records, self.thresholds)
        paths = [r.path for r in result.critical]
        self.assertEqual(["pinned-b.js", "pinned-a.js"], paths[:2])
        self.assertEqual(["new.js", "big-grow.js", "shrink.js", "deleted.js"], paths[2:])

    def test_always_critical_not_repeated_even_when_over_threshold(self) -> None:
        records = self.records + [_rec("pinned-c.js", 1000, 2000)]
        thresholds = ThresholdConfig(0.02, 0.002, ("pinned-c.js",))
        result = classify(records, thresholds)
        paths = [r.path for r in result.critical]
        self.assertEqual(1, paths.count("pinned-c.js"))
        self.assertEqual("pinned-c.js", paths[0])

    def test_significant_subset_sorted_desc_with_sentinels_at_ends(self) -> None:
        result = classify(self.records, self.thresholds)
        self.assertEqual(
            ["new.js", "big-grow.js", "small-grow.js", "shrink.js", "deleted.js"],
            [r.path for r in result.significant],
        )

    def test_unchanged_record_excluded_unless_pinned(self) -> None:
        records = [_rec("same.js", 1000, 1000)]
        result = classify(records, ThresholdConfig(0.02, 0.002, ()))
        self.assertEqual((), result.critical)
        self.assertEqual((), result.significant)

    def test_threshold_is_strictly_greater_than(self) -> None:
        self.assertFalse(exceeds(0.02, 0.02))
        self.assertTrue(exceeds(0.0201, 0.02))
        self.assertTrue(exceeds(-0.03, 0.02))
        self.assertTrue(exceeds(NEW_FILE_RATIO, 0.02))
        self.assertTrue(exceeds(DELETED_RATIO, 5.0))

    def test_example_five_percent_growth_is_critical(self) -> None:
        rec = _rec("a.js", 1000, 1050)
        result = classify([rec], ThresholdConfig(0.02, 0.002, ()))
        self.assertEqual([rec], list(result.critical))
        self.assertEqual(0.05, rec.size_change_ratio)

    def test_missing_always_critical_path_is_fatal(self) -> None:
        thresholds = ThresholdConfig(0.02, 0.002, ("pinned-a.js", "not-built.js"))
        with self.assertRaises(MissingCriticalArtifact) as ctx:
            classify(self.records, thresholds)
        self.assertEqual("not-built.js", ctx.exception.path)
        self.assertIn("not-built.js", str(ctx.exception))

    def test_equal_ratios_keep_input_order(self) -> None:
        records = [_rec("z.js", 1000, 1100), _rec("a.js", 2000, 2200), _rec("m.js", 100, 110)]
        ordered = sort_by_ratio_desc(records)
        self.assertEqual(["z.js", "a.js", "m.js"], [r.path for r in ordered])

    def test_classification_is_repeatable(self) -> None:
        a = classify(self.records, self.thresholds)
        b = classify(list(self.records), self.thresholds)
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
