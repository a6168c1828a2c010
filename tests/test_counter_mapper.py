import unittest

from analysis.counter_rules import ModuleType
from analysis.device_model import DeviceGeometry
from analysis.util.messages import RecordingSink
from aiect.mapping.counter_mapper import CounterMapper, CTCounterInfo
from aiect.parser.file_loader import ASMFileInfo

from tests.helpers import make_static_info


class TestGetConfiguredCounters(unittest.TestCase):
    def setUp(self):
        self.sink = RecordingSink()
        self.mapper = CounterMapper(DeviceGeometry(25, 20), messages=self.sink)

    def test_skips_unavailable(self):
        store = make_static_info([
            (1, 2, 0, "aie"),
            None,
            (9, 3, 1, "aie_memory"),
        ])
        counters = self.mapper.get_configured_counters(store, 0)
        self.assertEqual(len(counters), 2)
        self.assertEqual(counters[0], CTCounterInfo(1, 2, 0, "aie", 0x0002231520))
        self.assertEqual(counters[1].address_hex, "0x0012311024")
        self.assertEqual(counters[1].module_type, ModuleType.MEMORY)
        self.assertIn("Retrieved 2 configured AIE counters", self.sink.messages("debug"))

    def test_unknown_device(self):
        store = make_static_info([(1, 2, 0, "aie")], device_id=0)
        self.assertEqual(self.mapper.get_configured_counters(store, 3), [])

    def test_keeps_raw_module_string(self):
        store = make_static_info([(1, 2, 0, "unknown_type")])
        counter = self.mapper.get_configured_counters(store, 0)[0]
        self.assertEqual(counter.module, "unknown_type")
        self.assertEqual(counter.module_type, ModuleType.CORE)
        self.assertEqual(counter.address, 0x0002231520)


class TestAssociate(unittest.TestCase):
    def setUp(self):
        self.mapper = CounterMapper(DeviceGeometry(25, 20), messages=RecordingSink())
        self.counters = [
            CTCounterInfo(9, 3, 1, "aie_memory", 0x12311024),
            CTCounterInfo(0, 2, 0, "aie", 0x231520),
            CTCounterInfo(15, 2, 0, "aie", 0x1E231520),
            CTCounterInfo(8, 1, 2, "memory_tile", 0x10191028),
            CTCounterInfo(11, 0, 0, "interface_tile", 0x16031020),
        ]

    def test_filter_inclusive_range(self):
        filtered = CounterMapper.filter_counters_by_column(self.counters, 8, 11)
        self.assertEqual([c.column for c in filtered], [9, 8, 11])

    def test_tile_group_two(self):
        asm2 = ASMFileInfo.from_path("aie_runtime_control2.asm", 2)
        unassigned = self.mapper.associate([asm2], self.counters)
        self.assertEqual([c.column for c in asm2.counters], [9, 8, 11])
        self.assertEqual([c.column for c in unassigned], [0, 15])

    def test_each_counter_in_at_most_one_file(self):
        files = [ASMFileInfo.from_path(f"aie_runtime_control{i}.asm", i) for i in range(3)]
        unassigned = self.mapper.associate(files, self.counters)
        seen = [c for f in files for c in f.counters]
        self.assertEqual(len(seen) + len(unassigned), len(self.counters))
        self.assertEqual([c.column for c in files[0].counters], [0])
        self.assertEqual(files[1].counters, [])


if __name__ == "__main__":
    unittest.main()
