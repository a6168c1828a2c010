import unittest

from analysis.counter_rules import (
    CORE_MODULE_BASE_OFFSET,
    MEM_TILE_BASE_OFFSET,
    MEMORY_MODULE_BASE_OFFSET,
    SHIM_TILE_BASE_OFFSET,
    ModuleType,
    calculate_counter_address,
    format_address,
    module_base_offset,
    module_type_for,
    tile_address,
)
from analysis.device_model import DeviceGeometry, DeviceModel, geometry_from_metadata
from analysis.util.validators import AIEConfigMetadata


class TestModuleResolution(unittest.TestCase):
    def test_known_modules(self):
        self.assertEqual(module_type_for("aie"), ModuleType.CORE)
        self.assertEqual(module_type_for("aie_memory"), ModuleType.MEMORY)
        self.assertEqual(module_type_for("memory_tile"), ModuleType.MEM_TILE)
        self.assertEqual(module_type_for("interface_tile"), ModuleType.INTERFACE_TILE)

    def test_unknown_module_falls_back_to_core(self):
        self.assertEqual(module_type_for("unknown_type"), ModuleType.CORE)
        self.assertEqual(module_type_for(""), ModuleType.CORE)
        self.assertEqual(module_base_offset("unknown_type"), module_base_offset("aie"))

    def test_base_offsets(self):
        self.assertEqual(module_base_offset("aie"), CORE_MODULE_BASE_OFFSET)
        self.assertEqual(module_base_offset("aie_memory"), MEMORY_MODULE_BASE_OFFSET)
        self.assertEqual(module_base_offset("memory_tile"), MEM_TILE_BASE_OFFSET)
        self.assertEqual(module_base_offset("interface_tile"), SHIM_TILE_BASE_OFFSET)


class TestCounterAddress(unittest.TestCase):
    FIXTURES = [
        # column, row, counter, module, expected
        (1, 2, 0, "aie", 0x0002231520),
        (9, 3, 1, "aie_memory", 0x0012311024),
        (8, 1, 2, "memory_tile", 0x0010191028),
        (0, 0, 3, "interface_tile", 0x000003102C),
        (15, 2, 0, "aie", 0x001E231520),
        (1, 2, 0, "unknown_type", 0x0002231520),
    ]

    def test_fixtures(self):
        for column, row, counter, module, expected in self.FIXTURES:
            with self.subTest(column=column, row=row, counter=counter, module=module):
                self.assertEqual(calculate_counter_address(column, row, counter, module, 25, 20), expected)

    def test_formula(self):
        for cs, rs in [(25, 20), (23, 18), (0, 0)]:
            for column, row, counter, module, _ in self.FIXTURES:
                expected = ((column << cs) | (row << rs)) + module_base_offset(module) + counter * 4
                self.assertEqual(calculate_counter_address(column, row, counter, module, cs, rs), expected)

    def test_call_order_independent(self):
        forward = [calculate_counter_address(c, r, n, m, 25, 20) for c, r, n, m, _ in self.FIXTURES]
        backward = [calculate_counter_address(c, r, n, m, 25, 20) for c, r, n, m, _ in reversed(self.FIXTURES)]
        self.assertEqual(forward, list(reversed(backward)))

    def test_tile_address_packs_with_or(self):
        self.assertEqual(tile_address(3, 5, 25, 20), (3 << 25) | (5 << 20))
        # overlapping fields are OR-ed, not added
        self.assertEqual(tile_address(1, 1, 4, 4), 0x10)


class TestFormatAddress(unittest.TestCase):
    def test_ten_lowercase_digits(self):
        self.assertEqual(format_address(0x2231520), "0x0002231520")
        self.assertEqual(format_address(0x1E231520), "0x001e231520")
        self.assertEqual(format_address(0), "0x0000000000")

    def test_wide_values_not_truncated(self):
        self.assertEqual(format_address(0xFF_FFFF_FFFF), "0xffffffffff")
        self.assertEqual(format_address(0x1_00_0000_0000), "0x10000000000")


class TestDeviceGeometry(unittest.TestCase):
    def test_geometry_from_metadata(self):
        device = DeviceModel(AIEConfigMetadata(column_shift=23, row_shift=18))
        geometry = geometry_from_metadata(device)
        self.assertEqual(geometry, DeviceGeometry(23, 18))
        self.assertEqual(geometry.counter_address(2, 1, 1, "aie"),
                         calculate_counter_address(2, 1, 1, "aie", 23, 18))

    def test_default_metadata(self):
        self.assertEqual(DeviceModel().get_geometry(), DeviceGeometry(25, 20))

    def test_valid_coordinate(self):
        device = DeviceModel(AIEConfigMetadata(num_columns=8, num_rows=6))
        self.assertTrue(device.is_valid_coordinate(7, 5))
        self.assertFalse(device.is_valid_coordinate(8, 0))
        self.assertTrue(DeviceModel().is_valid_coordinate(100, 100))


if __name__ == "__main__":
    unittest.main()
