#Model Validators

from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel , RootModel

from configs.ct_paths import DEFAULT_COLUMN_SHIFT, DEFAULT_ROW_SHIFT


class AIEConfigMetadata(BaseModel):
    """Model of the AIE configuration metadata"""
    column_shift:   int = DEFAULT_COLUMN_SHIFT
    row_shift:  int = DEFAULT_ROW_SHIFT
    hw_generation:  Optional[int] = None
    num_columns:    Optional[int] = None
    num_rows:   Optional[int] = None

    def shifts(self) -> Tuple[int,int]:
        """
        return (column_shift,row_shift)
        """
        return (self.column_shift,self.row_shift)


class AIECounter(BaseModel):
    """
    Model of a configured AIE performance counter
    """
    column: int
    row:    int
    counterNumber:  int
    module: str


class ListAIECounters(RootModel[List[Optional[AIECounter]]]):
    """
    List of counters configured on one device, `None` marks an unavailable slot
    """

    def __len__(self):
        return len(self.root)

    def get_counter(self,index:int) -> AIECounter | None:
        """
        return counter at index, or None
        """
        if 0 <= index < len(self.root):
            return self.root[index]
        return None


class StaticInfo(RootModel[Dict[int, ListAIECounters]]):
    """
    Static info store, device id -> configured counters
    """

    def get_num_aie_counter(self,device_id:int) -> int:
        """
        return number of counter slots configured on the device
        """
        counters = self.root.get(device_id)
        return len(counters) if counters is not None else 0

    def get_aie_counter(self,device_id:int,index:int) -> AIECounter | None:
        """
        return counter `index` of the device, or None
        """
        counters = self.root.get(device_id)
        if counters is None:
            return None
        return counters.get_counter(index)

    def get_device_ids(self) -> List[int]:
        """
        return all device ids in ascending order
        """
        return sorted(self.root.keys())
