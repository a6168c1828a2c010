# discovery of aie_runtime_control<id>.asm files and SAVE_TIMESTAMPS parsing

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from aiect.parser.asm_lexer import AsmLexer, NO_INDEX, match_control_filename
from analysis.util.messages import MessageSink, get_messages

COLUMNS_PER_ASM = 4
UC_PER_ASM = 4


@dataclass
class SaveTimestampInfo:
    """One SAVE_TIMESTAMPS instruction in a control file"""
    line_number: int
    optional_index: int = NO_INDEX

    def has_index(self) -> bool:
        return self.optional_index != NO_INDEX


@dataclass
class ASMFileInfo:
    """
    One discovered control file

    The tile-group id from the file name fixes everything else: the
    micro-controller number and the 4-column range it owns.
    """
    filename: str
    asm_id: int
    uc_number: int
    col_start: int
    col_end: int
    timestamps: List[SaveTimestampInfo] = field(default_factory=list)
    counters: list = field(default_factory=list)

    @classmethod
    def from_path(cls, path: Union[str, Path], asm_id: int) -> "ASMFileInfo":
        col_start = asm_id * COLUMNS_PER_ASM
        return cls(
            filename=str(path),
            asm_id=asm_id,
            uc_number=UC_PER_ASM * asm_id,
            col_start=col_start,
            col_end=col_start + COLUMNS_PER_ASM - 1,
        )

    @property
    def basename(self) -> str:
        return Path(self.filename).name

    def owns_column(self, column: int) -> bool:
        return self.col_start <= column <= self.col_end

    def is_probed(self) -> bool:
        """True when the file gets a jprobe block"""
        return bool(self.timestamps) and bool(self.counters)

    def __repr__(self):
        return (f"ASMFileInfo(File:[{self.basename}] , Id:[{self.asm_id}] , UC:[{self.uc_number}] , "
                f"Columns:[{self.col_start}-{self.col_end}] , Timestamps:[{len(self.timestamps)}] , "
                f"Counters:[{len(self.counters)}])")


def _raise_walk_error(err: OSError):
    raise err


class ControlFileLoader:
    """
    Finds control files under a root directory and reads their markers.
    """

    def __init__(self, root_dir: Union[str, Path, None] = None, messages: Optional[MessageSink] = None):
        self.root_dir = Path(root_dir) if root_dir is not None else Path.cwd()
        self.messages = messages if messages is not None else get_messages()

    def find_asm_files(self) -> List[ASMFileInfo]:
        """
        Recursively search root_dir for aie_runtime_control<id>.asm

        Returns:
            Files sorted by id. A traversal error stops the walk; whatever
            was found before it is still returned.
        """
        asm_files: List[ASMFileInfo] = []

        try:
            for dirpath, dirnames, filenames in os.walk(self.root_dir, onerror=_raise_walk_error):
                dirnames.sort()
                for name in sorted(filenames):
                    asm_id = match_control_filename(name)
                    if asm_id is None:
                        continue
                    path = Path(dirpath) / name
                    if not path.is_file():
                        continue

                    info = ASMFileInfo.from_path(path, asm_id)
                    asm_files.append(info)
                    self.messages.debug(
                        f"Found ASM file: {info.filename} (id={info.asm_id}, uc={info.uc_number}, "
                        f"columns {info.col_start}-{info.col_end})")
        except OSError as e:
            self.messages.warning(f"Error searching for ASM files: {e}")

        asm_files.sort(key=lambda f: (f.asm_id, f.filename))
        return asm_files

    def parse_save_timestamps(self, filepath: Union[str, Path]) -> List[SaveTimestampInfo]:
        """
        Collect SAVE_TIMESTAMPS lines of one file in line order

        An unreadable file, or one whose marker index cannot be converted,
        is reported and treated as having none.
        """
        try:
            with open(filepath, "r", encoding="utf-8", errors="replace", newline="\n") as f:
                tokens = AsmLexer().lexer(f)
        except OSError:
            self.messages.warning(f"Unable to open ASM file: {filepath}")
            return []
        except ValueError as e:
            self.messages.warning(f"Error parsing SAVE_TIMESTAMPS in {filepath}: {e}")
            return []

        timestamps = [SaveTimestampInfo(tok.line_number, tok.index) for tok in tokens]
        self.messages.debug(f"Found {len(timestamps)} SAVE_TIMESTAMPS in {filepath}")
        return timestamps

    def load(self) -> List[ASMFileInfo]:
        """find_asm_files() with timestamps filled in"""
        asm_files = self.find_asm_files()
        for asm_file in asm_files:
            asm_file.timestamps = self.parse_save_timestamps(asm_file.filename)
        return asm_files
