# aiect/generator/ct_generator.py
"""
CT Generator - end-to-end CT file generation

find control files -> read counters -> parse SAVE_TIMESTAMPS and
associate counters -> write the CT script.
"""

from pathlib import Path
from typing import List, Optional, Union

from analysis.device_model import DeviceGeometry, geometry_from_metadata
from aiect.mapping.counter_mapper import CounterMapper, CTCounterInfo, StaticInfoStore
from aiect.parser.file_loader import ASMFileInfo, ControlFileLoader
from aiect.report.ct_writer import CTScriptWriter, default_output_path
from analysis.util.messages import MessageSink, get_messages


class CTGenerator:
    """
    Generates the CT file for one device

    Geometry is read from the metadata once, here. Each generate() call
    rebuilds its file and counter snapshots from scratch.
    """

    def __init__(self, static_info: StaticInfoStore, metadata, device_id: int = 0,
                 messages: Optional[MessageSink] = None,
                 root_dir: Union[str, Path, None] = None,
                 output_dir: Union[str, Path, None] = None):
        self.static_info = static_info
        self.device_id = device_id
        self.messages = messages if messages is not None else get_messages()
        self.root_dir = root_dir
        self.output_dir = output_dir
        self.geometry: DeviceGeometry = geometry_from_metadata(metadata)

        self.loader = ControlFileLoader(root_dir, messages=self.messages)
        self.mapper = CounterMapper(self.geometry, messages=self.messages)
        self.writer = CTScriptWriter(messages=self.messages)

    @property
    def output_path(self) -> Path:
        return default_output_path(self.output_dir)

    def collect(self):
        """
        Run discovery, parsing and association without writing anything

        Returns:
            (asm_files, all_counters, unassigned_counters); any may be empty
        """
        asm_files = self.loader.load()
        all_counters = self.mapper.get_configured_counters(self.static_info, self.device_id)
        unassigned = self.mapper.associate(asm_files, all_counters)
        return asm_files, all_counters, unassigned

    def generate(self) -> bool:
        """
        Write the CT file

        Returns:
            True when a CT file was written, False when there was nothing
            to generate or the file could not be created
        """
        asm_files = self.loader.find_asm_files()
        if not asm_files:
            self.messages.debug(
                "No aie_runtime_control<id>.asm files found. CT file will not be generated.")
            return False

        all_counters = self.mapper.get_configured_counters(self.static_info, self.device_id)
        if not all_counters:
            self.messages.debug("No AIE counters configured. CT file will not be generated.")
            return False

        has_timestamps = False
        for asm_file in asm_files:
            asm_file.timestamps = self.loader.parse_save_timestamps(asm_file.filename)
            if asm_file.timestamps:
                has_timestamps = True
        self.mapper.associate(asm_files, all_counters)

        if not has_timestamps:
            self.messages.debug(
                "No SAVE_TIMESTAMPS instructions found in ASM files. CT file will not be generated.")
            return False

        return self.write_ct_file(asm_files, all_counters)

    def write_ct_file(self, asm_files: List[ASMFileInfo], all_counters: List[CTCounterInfo]) -> bool:
        return self.writer.save(asm_files, all_counters, self.output_path)
