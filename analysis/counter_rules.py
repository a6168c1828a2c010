# counter_rules.py
# Performance counter register rules for AIE tiles
# Module base offsets and tile address packing

from enum import Enum


# ============================================================================
# Section A - Module Types
# ============================================================================

class ModuleType(Enum):
    """
    Hardware module inside a tile that owns a counter
    Values are the module strings reported by the static info store
    """
    CORE = "aie"
    MEMORY = "aie_memory"
    MEM_TILE = "memory_tile"
    INTERFACE_TILE = "interface_tile"


# Offset of Performance_Counter0 inside each module
CORE_MODULE_BASE_OFFSET = 0x00031520
MEMORY_MODULE_BASE_OFFSET = 0x00011020
MEM_TILE_BASE_OFFSET = 0x00091020
SHIM_TILE_BASE_OFFSET = 0x00031020

MODULE_BASE_OFFSETS = {
    ModuleType.CORE: CORE_MODULE_BASE_OFFSET,
    ModuleType.MEMORY: MEMORY_MODULE_BASE_OFFSET,
    ModuleType.MEM_TILE: MEM_TILE_BASE_OFFSET,
    ModuleType.INTERFACE_TILE: SHIM_TILE_BASE_OFFSET,
}

# Each counter register is one 32-bit slot
COUNTER_STRIDE = 4

ADDRESS_MASK = 0xFFFF_FFFF_FFFF_FFFF
ADDRESS_HEX_DIGITS = 10


# ============================================================================
# Section B - Module Resolution
# ============================================================================

def module_type_for(module: str) -> ModuleType:
    """
    Resolve a module string to its ModuleType

    Unknown strings resolve to CORE and are never rejected.
    """
    try:
        return ModuleType(module)
    except ValueError:
        return ModuleType.CORE


def module_base_offset(module: str) -> int:
    return MODULE_BASE_OFFSETS[module_type_for(module)]


# ============================================================================
# Section C - Address Computation
# ============================================================================

def tile_address(column: int, row: int, column_shift: int, row_shift: int) -> int:
    """
    Pack (column,row) into the tile base address
    """
    return ((column << column_shift) | (row << row_shift)) & ADDRESS_MASK


def calculate_counter_address(column: int, row: int, counter_number: int,
                              module: str, column_shift: int, row_shift: int) -> int:
    """
    Physical address of a counter register

    Args:
        column: Tile column
        row: Tile row
        counter_number: Counter slot inside the module
        module: Module string from the static info store
        column_shift: Bit position of the column field
        row_shift: Bit position of the row field

    Returns:
        tile base + module base offset + counter_number * 4
    """
    base = tile_address(column, row, column_shift, row_shift)
    offset = module_base_offset(module)
    return (base + offset + counter_number * COUNTER_STRIDE) & ADDRESS_MASK


def format_address(address: int) -> str:
    """0x-prefixed, 10 lowercase hex digits"""
    return f"0x{address:0{ADDRESS_HEX_DIGITS}x}"


__all__ = [
    'ModuleType',
    'MODULE_BASE_OFFSETS',
    'CORE_MODULE_BASE_OFFSET',
    'MEMORY_MODULE_BASE_OFFSET',
    'MEM_TILE_BASE_OFFSET',
    'SHIM_TILE_BASE_OFFSET',
    'COUNTER_STRIDE',
    'module_type_for',
    'module_base_offset',
    'tile_address',
    'calculate_counter_address',
    'format_address',
]
