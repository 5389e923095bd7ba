from __future__ import annotations

from contextlib import redirect_stdout
import io
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from quickplot.cli import csv_build, demo_build, main
from quickplot.session import PlotSession


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)

    def test_demo_headless_snapshot(self) -> None:
        snapshot = self.tmp / "demo.png"
        out = io.StringIO()
        with redirect_stdout(out):
            main(
                [
                    "demo",
                    "--render",
                    "headless",
                    "--frames",
                    "2",
                    "--width",
                    "200",
                    "--height",
                    "150",
                    "--snapshot",
                    str(snapshot),
                ]
            )
        self.assertIn("frames=2", out.getvalue())
        with Image.open(snapshot) as image:
            self.assertEqual(image.size, (200, 150))

    def test_demo_build_declares_two_series(self) -> None:
        session = PlotSession()
        demo_build(session)
        valid, errors = session.store.finalize()
        self.assertEqual(errors, [])
        self.assertEqual([len(s) for s in valid], [3, 4])
        self.assertEqual(valid[1].x.tolist(), [0.0, 1.0, 2.0, 3.0])

    def test_csv_build_uses_x_column(self) -> None:
        path = self.tmp / "data.csv"
        path.write_text("t,a,b\n0,1,5\n1,4,6\n2,9,7\n", encoding="utf-8")
        build = csv_build(path, x_column=0, skip_rows=1)
        session = PlotSession()
        build(session)
        valid, _ = session.store.finalize()
        self.assertEqual(len(valid), 2)
        self.assertEqual(valid[0].x.tolist(), [0.0, 1.0, 2.0])
        self.assertEqual(valid[0].y.tolist(), [1.0, 4.0, 9.0])
        self.assertEqual(valid[1].y.tolist(), [5.0, 6.0, 7.0])
        self.assertNotEqual(valid[0].color, valid[1].color)

    def test_csv_build_rejects_missing_column(self) -> None:
        path = self.tmp / "data.csv"
        path.write_text("1,2\n3,4\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            csv_build(path, columns=[5])

    def test_csv_command_headless(self) -> None:
        path = self.tmp / "wave.csv"
        path.write_text("0\n1\n0\n-1\n", encoding="utf-8")
        out = io.StringIO()
        with redirect_stdout(out):
            main(["csv", str(path), "--render", "headless"])
        self.assertIn("frames=1", out.getvalue())

    def test_rejects_unknown_renderer(self) -> None:
        with self.assertRaises(SystemExit):
            main(["demo", "--render", "opengl"])


if __name__ == "__main__":
    unittest.main()
