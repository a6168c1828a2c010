#!/usr/bin/env python3
"""AIE profile CT file workflows and reusable helpers."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from colorama import Fore, Style, just_fix_windows_console
from pydantic import ValidationError

from analysis.device_model import DeviceModel
from analysis.util.json_loader import JsonLoader
from analysis.util.messages import RecordingSink, setup_logger
from analysis.util.validators import AIEConfigMetadata, StaticInfo
from aiect.generator.ct_generator import CTGenerator
from aiect.mapping.counter_mapper import CTCounterInfo
from aiect.parser.file_loader import ASMFileInfo
from configs.ct_paths import DEFAULT_DEVICE_ID


class Colors:
    """Color palette for consistent theming"""
    PRIMARY = Fore.CYAN
    SUCCESS = Fore.GREEN
    WARNING = Fore.YELLOW
    ERROR = Fore.RED
    DIM = Style.DIM
    RESET = Style.RESET_ALL


def colorize(text: str, color: str = "") -> str:
    """Apply color to text if terminal supports it"""
    if sys.stdout.isatty():
        return f"{color}{text}{Style.RESET_ALL}"
    return text


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    generated: bool
    output_path: Path
    device_id: int


@dataclass
class InspectionResult:
    """Everything the generator would use, without writing a CT file."""

    asm_files: List[ASMFileInfo]
    counters: List[CTCounterInfo]
    unassigned: List[CTCounterInfo]
    out_of_bounds: List[CTCounterInfo] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    device_ids: List[int] = field(default_factory=list)

    @property
    def probed_files(self) -> List[ASMFileInfo]:
        return [f for f in self.asm_files if f.is_probed()]


def load_device_model(metadata_path: Optional[str]) -> DeviceModel:
    if metadata_path is None:
        return DeviceModel(AIEConfigMetadata())
    return DeviceModel(JsonLoader.load_config_metadata(metadata_path))


def load_static_info(counters_path: str) -> StaticInfo:
    return JsonLoader.load_static_info(counters_path)


def run_generation(
    counters_path: str,
    *,
    metadata_path: Optional[str] = None,
    device_id: int = DEFAULT_DEVICE_ID,
    root_dir: Optional[str] = None,
    output_dir: Optional[str] = None,
) -> GenerationResult:
    device = load_device_model(metadata_path)
    static_info = load_static_info(counters_path)

    generator = CTGenerator(
        static_info,
        device,
        device_id,
        root_dir=root_dir,
        output_dir=output_dir,
    )
    generated = generator.generate()
    return GenerationResult(generated=generated, output_path=generator.output_path, device_id=device_id)


def run_inspection(
    counters_path: str,
    *,
    metadata_path: Optional[str] = None,
    device_id: int = DEFAULT_DEVICE_ID,
    root_dir: Optional[str] = None,
) -> InspectionResult:
    device = load_device_model(metadata_path)
    static_info = load_static_info(counters_path)

    sink = RecordingSink()
    generator = CTGenerator(static_info, device, device_id, messages=sink, root_dir=root_dir)
    asm_files, counters, unassigned = generator.collect()
    out_of_bounds = [c for c in counters if not device.is_valid_coordinate(c.column, c.row)]

    return InspectionResult(
        asm_files=asm_files,
        counters=counters,
        unassigned=unassigned,
        out_of_bounds=out_of_bounds,
        warnings=sink.messages("warning"),
        device_ids=static_info.get_device_ids(),
    )


__all__ = [
    "run_generation",
    "run_inspection",
    "load_device_model",
    "load_static_info",
]


def _print_inspection(result: InspectionResult):
    print(colorize("\nControl Files", Colors.PRIMARY))
    print("-" * 60)
    if not result.asm_files:
        print(colorize("  none found", Colors.DIM))
    for f in result.asm_files:
        lines = ",".join(str(ts.line_number) for ts in f.timestamps) or "-"
        status = colorize("probe", Colors.SUCCESS) if f.is_probed() else colorize("skip", Colors.DIM)
        print(f"  {f.basename:32} uc{f.uc_number:<4} cols {f.col_start:>3}-{f.col_end:<3} "
              f"lines {lines:16} counters {len(f.counters):<3} {status}")

    print(colorize("\nCounters", Colors.PRIMARY))
    print("-" * 60)
    if not result.counters:
        devices = ", ".join(str(d) for d in result.device_ids) or "none"
        print(colorize(f"  none configured (devices in counter file: {devices})", Colors.DIM))
    for c in result.counters:
        print(f"  col {c.column:>3} row {c.row:>3} ctr {c.counter_number:>2} "
              f"{c.module:16} {c.address_hex}")

    if result.unassigned:
        print(colorize(f"\n{len(result.unassigned)} counter(s) outside every control file range",
                       Colors.WARNING))
    if result.out_of_bounds:
        print(colorize(f"{len(result.out_of_bounds)} counter(s) outside the device dimensions",
                       Colors.WARNING))
    for msg in result.warnings:
        print(colorize(f"warning: {msg}", Colors.WARNING))


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="AIE profile CT file generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_ct_writer.py --counters aie_counters.json
  python run_ct_writer.py --counters aie_counters.json --metadata aie_config.json --root build/
  python run_ct_writer.py --counters aie_counters.json --inspect
        """,
    )

    parser.add_argument("--counters", metavar="PATH", required=True,
                        help="JSON file with configured counters per device")
    parser.add_argument("--metadata", metavar="PATH",
                        help="JSON file with AIE configuration metadata (column_shift, row_shift)")
    parser.add_argument("--device-id", type=int, default=DEFAULT_DEVICE_ID, help="Device id")
    parser.add_argument("--root", metavar="DIR", help="Directory searched for control files")
    parser.add_argument("--output-dir", metavar="DIR", help="Directory the CT file is written to")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    parser.add_argument("--inspect", action="store_true",
                        help="Show control files and counters without writing a CT file")

    args = parser.parse_args(argv)
    just_fix_windows_console()
    setup_logger(args.log_level)

    try:
        if args.inspect:
            result = run_inspection(
                args.counters,
                metadata_path=args.metadata,
                device_id=args.device_id,
                root_dir=args.root,
            )
            _print_inspection(result)
            return 0

        result = run_generation(
            args.counters,
            metadata_path=args.metadata,
            device_id=args.device_id,
            root_dir=args.root,
            output_dir=args.output_dir,
        )
    except (OSError, ValidationError) as e:
        print(colorize(f"Error loading inputs: {e}", Colors.ERROR))
        return 1

    if result.generated:
        print(colorize(f"CT file written: {result.output_path}", Colors.SUCCESS))
        return 0

    print(colorize("No CT file generated.", Colors.WARNING))
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
