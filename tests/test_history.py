import os
import sys
import unittest

import polars as pl

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from complexnet import Network


class TestHistory(unittest.TestCase):
    def setUp(self):
        self.net = Network(4)
        self.net.add_nodes(2)
        self.net.add_link(0, 1)

    def test_events_record_arguments_and_result(self):
        events = self.net.history()
        self.assertEqual([e["op"] for e in events], ["add_nodes", "add_link"])
        self.assertEqual([e["version"] for e in events], [1, 2])
        self.assertEqual(events[0]["n"], 2)
        self.assertEqual(events[0]["strict"], False)
        self.assertEqual(events[0]["result"], 2)
        self.assertEqual((events[1]["a"], events[1]["b"], events[1]["result"]), (0, 1, 0))
        self.assertTrue(events[1]["ts_utc"].endswith("Z"))
        self.assertGreaterEqual(events[1]["mono_ns"], events[0]["mono_ns"])

    def test_disable_and_mark(self):
        self.net.enable_history(False)
        self.assertFalse(self.net.history_enabled())
        self.net.add_nodes(1)
        self.assertEqual(len(self.net.history()), 2)
        self.net.enable_history(True)
        self.net.mark("checkpoint", step=3)
        last = self.net.history()[-1]
        self.assertEqual((last["op"], last["label"], last["step"]), ("mark", "checkpoint", 3))

    def test_history_off_at_construction(self):
        net = Network(2, history=False)
        net.add_nodes(2)
        self.assertEqual(net.history(), [])
        self.assertEqual(net.export_history("unused.parquet"), 0)

    def test_clear_history(self):
        self.net.clear_history()
        self.assertEqual(self.net.history(), [])

    def test_history_is_a_copy(self):
        self.net.history().clear()
        self.assertEqual(len(self.net.history()), 2)

    def test_as_dataframe(self):
        df = self.net.history(as_df=True)
        self.assertIsInstance(df, pl.DataFrame)
        self.assertEqual(df.height, 2)
        self.assertEqual(df["op"].to_list(), ["add_nodes", "add_link"])

    def test_export_formats(self):
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            ndjson = os.path.join(tmp, "events.ndjson")
            self.assertEqual(self.net.export_history(ndjson), 2)
            self.assertEqual(pl.read_ndjson(ndjson).height, 2)

            net = Network(3)
            net.add_nodes(1)
            net.add_nodes(2)
            base = os.path.join(tmp, "events.log")
            self.assertEqual(net.export_history(base), 2)
            self.assertTrue(os.path.exists(base + ".parquet"))
            self.assertEqual(pl.read_parquet(base + ".parquet")["n"].to_list(), [1, 2])


if __name__ == "__main__":
    unittest.main()
