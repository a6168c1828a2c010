"""
CT Script Writer

Renders the counter-instrumentation (CT) script consumed by the tracing
engine. The script has a begin block that seeds `profile_data`, one jprobe
block per probed control file and an end block that dumps `profile_data`
to JSON. Output is a pure function of its inputs.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from configs.ct_paths import CT_JSON_FILENAME, CT_OUTPUT_FILENAME
from aiect.mapping.counter_mapper import CTCounterInfo
from aiect.parser.file_loader import ASMFileInfo
from analysis.util.messages import MessageSink, get_messages


HEADER_LINES = [
    "# Auto-generated CT file for AIE Profile counters",
    "# Generated by XRT AIE Profile Plugin",
]

BLOCK_OPEN = "@blockopen"
BLOCK_CLOSE = "@blockclose"


def counter_variable(index: int) -> str:
    return f"ctr_{index}"


def probe_declaration(asm_file: ASMFileInfo) -> str:
    """jprobe:<basename>:uc<n>:line<l1>,<l2>,..."""
    lines = ",".join(str(ts.line_number) for ts in asm_file.timestamps)
    return f"jprobe:{asm_file.basename}:uc{asm_file.uc_number}:line{lines}"


def counter_metadata_entry(counter: CTCounterInfo) -> str:
    return (f'        {{"column": {counter.column}, "row": {counter.row}, '
            f'"counter": {counter.counter_number}, "module": "{counter.module}", '
            f'"address": "{counter.address_hex}"}}')


class CTScriptWriter:
    """
    CT script renderer

    Usage:
        writer = CTScriptWriter()
        text = writer.render(asm_files, all_counters)
        writer.save(asm_files, all_counters, "aie_profile.ct")
    """

    def __init__(self, json_filename: str = CT_JSON_FILENAME, messages: Optional[MessageSink] = None):
        self.json_filename = json_filename
        self.messages = messages if messages is not None else get_messages()

    # ========================================================================
    # Blocks
    # ========================================================================

    def render_header(self) -> List[str]:
        return HEADER_LINES + [""]

    def render_begin(self, all_counters: List[CTCounterInfo]) -> List[str]:
        """
        begin block, counter_metadata lists every configured counter
        """
        lines = [
            "begin",
            "{",
            "    ts_start = timestamp32()",
            '    print("\\nAIE Profile tracing started\\n")',
            BLOCK_OPEN,
            "import json",
            "import os",
            "",
            "# Initialize data collection",
            "profile_data = {",
            '    "start_timestamp": ts_start,',
            '    "counter_metadata": [',
        ]

        last = len(all_counters) - 1
        for i, counter in enumerate(all_counters):
            entry = counter_metadata_entry(counter)
            lines.append(entry + "," if i < last else entry)

        lines += [
            "    ],",
            '    "probes": []',
            "}",
            BLOCK_CLOSE,
            "}",
            "",
        ]
        return lines

    def render_probe(self, asm_file: ASMFileInfo) -> List[str]:
        """
        jprobe block for one control file
        """
        basename = asm_file.basename
        lines = [
            f"# Probes for {basename} (columns {asm_file.col_start}-{asm_file.col_end})",
            probe_declaration(asm_file),
            "{",
            "    ts = timestamp32()",
        ]

        for i, counter in enumerate(asm_file.counters):
            lines.append(f"    {counter_variable(i)} = read_reg({counter.address_hex})")

        variables = ", ".join(counter_variable(i) for i in range(len(asm_file.counters)))
        lines += [
            '    print(f"Probe fired: ts={ts}")',
            BLOCK_OPEN,
            'profile_data["probes"].append({',
            f'    "asm_file": "{basename}",',
            '    "timestamp": ts,',
            f'    "counters": [{variables}]',
            "})",
            BLOCK_CLOSE,
            "}",
            "",
        ]
        return lines

    def render_end(self) -> List[str]:
        return [
            "end",
            "{",
            "    ts_end = timestamp32()",
            '    print("\\nAIE Profile tracing ended\\n")',
            BLOCK_OPEN,
            'profile_data["end_timestamp"] = ts_end',
            'profile_data["total_time"] = ts_end - profile_data["start_timestamp"]',
            "",
            f'output_path = os.path.join(os.getcwd(), "{self.json_filename}")',
            'with open(output_path, "w") as f:',
            "    json.dump(profile_data, f, indent=2)",
            'print(f"Profile data written to {output_path}")',
            BLOCK_CLOSE,
            "}",
        ]

    # ========================================================================
    # Script
    # ========================================================================

    def render(self, asm_files: List[ASMFileInfo], all_counters: List[CTCounterInfo]) -> str:
        """
        Full script text

        Files without timestamps or without counters get no probe block.
        """
        lines = self.render_header()
        lines += self.render_begin(all_counters)
        for asm_file in asm_files:
            if not asm_file.is_probed():
                continue
            lines += self.render_probe(asm_file)
        lines += self.render_end()
        return "\n".join(lines) + "\n"

    def save(self, asm_files: List[ASMFileInfo], all_counters: List[CTCounterInfo],
             filepath: Union[str, Path]) -> bool:
        """
        Render and write the script

        The text is rendered before the file is opened, so a failure leaves
        no partial file behind.

        Returns:
            True on success, False when the file cannot be written
        """
        text = self.render(asm_files, all_counters)
        path = Path(filepath)
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        except OSError:
            self.messages.warning(f"Unable to create CT file: {path}")
            return False

        self.messages.info(f"Generated CT file: {path}")
        return True


def default_output_path(output_dir: Union[str, Path, None] = None) -> Path:
    base = Path(output_dir) if output_dir is not None else Path.cwd()
    return base / CT_OUTPUT_FILENAME
