# aiect/mapping/counter_mapper.py
"""
Counter Mapper - configured counters to control files

Pulls every configured counter out of the static info store, computes its
register address and hands each control file the counters that sit in the
columns it owns.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol

from analysis.counter_rules import ModuleType, format_address, module_type_for
from analysis.device_model import DeviceGeometry
from aiect.parser.file_loader import ASMFileInfo
from analysis.util.messages import MessageSink, get_messages


class StaticInfoStore(Protocol):
    def get_num_aie_counter(self, device_id: int) -> int: ...
    def get_aie_counter(self, device_id: int, index: int): ...


@dataclass(frozen=True)
class CTCounterInfo:
    """A configured counter with its physical register address"""
    column: int
    row: int
    counter_number: int
    module: str
    address: int

    @property
    def module_type(self) -> ModuleType:
        return module_type_for(self.module)

    @property
    def address_hex(self) -> str:
        return format_address(self.address)


class CounterMapper:
    """
    Enumerates counters of one device and associates them with control files
    """

    def __init__(self, geometry: DeviceGeometry, messages: Optional[MessageSink] = None):
        self.geometry = geometry
        self.messages = messages if messages is not None else get_messages()

    def get_configured_counters(self, static_info: StaticInfoStore, device_id: int) -> List[CTCounterInfo]:
        """
        Read every available counter of the device

        Unavailable (None) slots are skipped.
        """
        counters: List[CTCounterInfo] = []

        num_counters = static_info.get_num_aie_counter(device_id)
        for i in range(num_counters):
            aie_counter = static_info.get_aie_counter(device_id, i)
            if aie_counter is None:
                continue

            address = self.geometry.counter_address(
                aie_counter.column, aie_counter.row, aie_counter.counterNumber, aie_counter.module)
            counters.append(CTCounterInfo(
                column=aie_counter.column,
                row=aie_counter.row,
                counter_number=aie_counter.counterNumber,
                module=aie_counter.module,
                address=address,
            ))

        self.messages.debug(f"Retrieved {len(counters)} configured AIE counters")
        return counters

    @staticmethod
    def filter_counters_by_column(all_counters: List[CTCounterInfo],
                                  col_start: int, col_end: int) -> List[CTCounterInfo]:
        """Counters with col_start <= column <= col_end, order kept"""
        return [c for c in all_counters if col_start <= c.column <= col_end]

    def associate(self, asm_files: List[ASMFileInfo], all_counters: List[CTCounterInfo]) -> List[CTCounterInfo]:
        """
        Fill `counters` of every control file

        Returns:
            Counters that no control file owns
        """
        for asm_file in asm_files:
            asm_file.counters = self.filter_counters_by_column(
                all_counters, asm_file.col_start, asm_file.col_end)

        return [c for c in all_counters
                if not any(f.owns_column(c.column) for f in asm_files)]
