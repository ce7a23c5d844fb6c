import json
import csv
import tempfile
import unittest
from pathlib import Path
from typing import Dict, List

from pipeline.config import SizeBotConfig
from pipeline.pipeline import CompareRequest, SizeBotPipeline, Stage, only_ignored_changes, run_size_comparison
from sizebot.domain import Measurement, Side
from sizebot.errors import ArtifactReadError, MissingCriticalArtifact, MissingRevisionMetadata


class _CollectingSink:
    def __init__(self) -> None:
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


class TestSizeComparisonRun(unittest.TestCase):
    def _mk_tree(self, root: Path, name: str, sha: str, files: Dict[str, int]) -> Path:
        tree = root / name
        tree.mkdir(parents=True, exist_ok=True)
        if sha:
            (tree / "COMMIT_SHA").write_text(sha + "\n", encoding="utf-8")
        for rel, size in files.items():
            p = tree / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(b"a" * size)
        return tree

    def _config(self, root: Path, **kw) -> SizeBotConfig:
        values = dict(
            base_dir=root / "base-build",
            head_dir=root / "build",
            always_critical_paths=("react-dom/cjs/react-dom.production.js",),
            diff_view_url_template="",
            workers=4,
        )
        values.update(kw)
        return SizeBotConfig(**values)

    def _standard_trees(self, root: Path) -> None:
        self._mk_tree(
            root,
            "base-build",
            "base0000",
            {
                "react-dom/cjs/react-dom.production.js": 1000,
                "react/index.js": 1000,
                "scheduler/index.js": 1000,
                "old/gone.js": 400,
            },
        )
        self._mk_tree(
            root,
            "build",
            "head1111",
            {
                "react-dom/cjs/react-dom.production.js": 1000,
                "react/index.js": 1050,
                "scheduler/index.js": 1000,
                "fresh/new.js": 300,
            },
        )

    def test_end_to_end_report(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._standard_trees(root)
            sink = _CollectingSink()

            result = run_size_comparison(
                CompareRequest(config=self._config(root), out_dir=root / "out"),
                sink=sink,
            )

            self.assertEqual(Stage.EMITTED, result.stage)
            self.assertEqual(("base0000", "head1111"), (result.base_sha, result.head_sha))
            self.assertEqual(1, len(sink.messages))
            text = sink.messages[0]
            self.assertTrue(text.startswith("Comparing: base0000...head1111"))

            crit = [r.path for r in result.classification.critical]
            self.assertEqual(
                [
                    "react-dom/cjs/react-dom.production.js",
                    "fresh/new.js",
                    "react/index.js",
                    "old/gone.js",
                ],
                crit,
            )
            self.assertIn("| `react/index.js` | **+5.00%** | 1.00 kB | 1.05 kB", text)
            self.assertIn("| `fresh/new.js` | **New file**", text)
            self.assertIn("| `old/gone.js` | **Deleted**", text)
            # Unchanged, unpinned artifact is in neither section.
            self.assertNotIn("scheduler/index.js", text)
            # Unchanged pinned artifact is always shown.
            self.assertIn("| `react-dom/cjs/react-dom.production.js` | **=**", text)

    def test_identical_inputs_give_identical_text(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._standard_trees(root)
            sink = _CollectingSink()
            req = CompareRequest(config=self._config(root), out_dir=root / "out")

            run_size_comparison(req, sink=sink)
            run_size_comparison(req, sink=sink)

            self.assertEqual(2, len(sink.messages))
            self.assertEqual(sink.messages[0].encode("utf-8"), sink.messages[1].encode("utf-8"))

    def test_missing_commit_marker_aborts_before_any_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._mk_tree(root, "base-build", "", {"a.js": 10})
            self._mk_tree(root, "build", "head1111", {"a.js": 10})
            sink = _CollectingSink()

            with self.assertRaises(MissingRevisionMetadata):
                run_size_comparison(
                    CompareRequest(config=self._config(root, always_critical_paths=())),
                    sink=sink,
                )
            self.assertEqual([], sink.messages)

    def test_missing_always_critical_bundle_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._mk_tree(root, "base-build", "base0000", {"a.js": 10})
            self._mk_tree(root, "build", "head1111", {"a.js": 10})
            sink = _CollectingSink()
            out_dir = root / "out"

            with self.assertRaises(MissingCriticalArtifact) as ctx:
                run_size_comparison(
                    CompareRequest(
                        config=self._config(root, always_critical_paths=("main.production.js",), max_message_chars=1),
                        out_dir=out_dir,
                    ),
                    sink=sink,
                )
            self.assertEqual("main.production.js", ctx.exception.path)
            self.assertEqual([], sink.messages)
            self.assertFalse(out_dir.exists())

    def test_read_error_aborts_run(self) -> None:
        def _measurer(path: Path, side: Side) -> Measurement:
            if side is Side.BASE:
                raise ArtifactReadError(path, side.value, "permission denied")
            return Measurement.present(10, 5)

        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._mk_tree(root, "base-build", "base0000", {"a.js": 10})
            self._mk_tree(root, "build", "head1111", {"a.js": 10})
            sink = _CollectingSink()

            with self.assertRaises(ArtifactReadError):
                run_size_comparison(
                    CompareRequest(config=self._config(root, always_critical_paths=())),
                    sink=sink,
                    measurer=_measurer,
                )
            self.assertEqual([], sink.messages)

    def test_overflow_emits_pointer_and_writes_fallback(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._standard_trees(root)
            sink = _CollectingSink()
            out_dir = root / "out"

            result = run_size_comparison(
                CompareRequest(
                    config=self._config(root, max_message_chars=200),
                    out_dir=out_dir,
                    job_url="https://ci.example/build/7",
                ),
                sink=sink,
            )

            fallback = out_dir / "sizebot-message.md"
            self.assertTrue(fallback.exists())
            self.assertEqual(result.report, fallback.read_text(encoding="utf-8"))
            self.assertIn("too large to display", sink.messages[0])
            self.assertIn("https://ci.example/build/7", sink.messages[0])

    def test_devtools_only_change_skips_run(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._standard_trees(root)
            sink = _CollectingSink()

            result = run_size_comparison(
                CompareRequest(
                    config=self._config(root),
                    changed_files=[
                        "packages/react-devtools-shared/src/backend.js",
                        "packages/react-devtools/README.md",
                    ],
                ),
                sink=sink,
            )

            self.assertEqual(Stage.SKIPPED, result.stage)
            self.assertEqual([], sink.messages)

    def test_only_ignored_changes(self) -> None:
        prefixes = ["packages/react-devtools"]
        self.assertFalse(only_ignored_changes(None, prefixes))
        self.assertFalse(only_ignored_changes([], prefixes))
        self.assertFalse(only_ignored_changes(["packages/react-devtools/a.js", "packages/react/b.js"], prefixes))
        self.assertTrue(only_ignored_changes(["packages/react-devtools/a.js"], prefixes))
        self.assertFalse(only_ignored_changes(["packages/react-devtools/a.js"], []))

    def test_record_exports(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self._standard_trees(root)
            out_dir = root / "out"

            result = SizeBotPipeline().compare(
                CompareRequest(config=self._config(root), out_dir=out_dir, export_records=True),
                sink=_CollectingSink(),
            )

            payload = json.loads(Path(result.exports["out_json"]).read_text(encoding="utf-8"))
            self.assertEqual("size_records_v1", payload["schema_version"])
            by_path = {r["path"]: r for r in payload["records"]}
            self.assertEqual("new", by_path["fresh/new.js"]["size_change_ratio"])
            self.assertEqual("deleted", by_path["old/gone.js"]["compressed_change_ratio"])
            self.assertEqual(0.05, by_path["react/index.js"]["size_change_ratio"])

            with Path(result.exports["out_csv"]).open("r", newline="", encoding="utf-8") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual(sorted(by_path), [r["path"] for r in rows])


if __name__ == "__main__":
    unittest.main()
