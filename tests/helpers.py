from pathlib import Path

from analysis.device_model import DeviceModel
from analysis.util.validators import AIECounter, AIEConfigMetadata, ListAIECounters, StaticInfo


def write_asm(root: Path, relpath: str, lines) -> Path:
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return path


def make_static_info(counters, device_id: int = 0) -> StaticInfo:
    """counters: iterable of (column, row, counterNumber, module) or None"""
    entries = [
        None if c is None else AIECounter(column=c[0], row=c[1], counterNumber=c[2], module=c[3])
        for c in counters
    ]
    return StaticInfo({device_id: ListAIECounters(entries)})


def make_device(column_shift: int = 25, row_shift: int = 20) -> DeviceModel:
    return DeviceModel(AIEConfigMetadata(column_shift=column_shift, row_shift=row_shift))
