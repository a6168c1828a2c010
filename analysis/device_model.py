# load config metadata + builds DeviceModel Object

from dataclasses import dataclass
from typing import Optional, Tuple

from analysis.counter_rules import calculate_counter_address
from analysis.util.validators import AIEConfigMetadata


@dataclass(frozen=True)
class DeviceGeometry:
    """
    Bit layout of tile addresses, fixed for one generation run
    """
    column_shift: int
    row_shift: int

    def counter_address(self, column: int, row: int, counter_number: int, module: str) -> int:
        """
        return physical address of a counter register
        """
        return calculate_counter_address(column, row, counter_number, module,
                                         self.column_shift, self.row_shift)


class DeviceModel:
    """
    Device Model
    """
    def __init__(self, config: Optional[AIEConfigMetadata] = None):
        self.config = config if config is not None else AIEConfigMetadata()
        self.geometry = DeviceGeometry(*self.config.shifts())

    def get_aie_config_metadata(self) -> AIEConfigMetadata:
        """
        return AIE configuration metadata
        """
        return self.config

    def get_geometry(self) -> DeviceGeometry:
        """
        return tile address layout
        """
        return self.geometry

    def get_dimensions(self) -> Tuple[Optional[int],Optional[int]]:
        """
        return dimensions of device , (col,row), None when not reported
        """
        return (self.config.num_columns,self.config.num_rows)

    def is_valid_coordinate(self,col:int,row:int) -> bool:
        """
        check if the given coordinate is in dimension of device
        """
        cols , rows = self.get_dimensions()
        if cols is not None and not 0 <= col < cols:
            return False
        if rows is not None and not 0 <= row < rows:
            return False
        return True


def geometry_from_metadata(metadata) -> DeviceGeometry:
    """
    Read the two shifts from anything exposing get_aie_config_metadata()
    """
    config = metadata.get_aie_config_metadata()
    return DeviceGeometry(*config.shifts())
