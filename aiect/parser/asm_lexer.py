import io
import re
from typing import List, Optional, Tuple


NO_INDEX = -1


class LexRule:
    def __init__(self, name:str , pattern:str , flags:int = 0 , full_match:bool = False):
        self.name = name
        self.pattern = re.compile(pattern, flags)
        self.full_match = full_match

    def match(self, text:str) -> Optional[re.Match]:
        if self.full_match:
            return self.pattern.fullmatch(text)
        return self.pattern.search(text)

    def __repr__(self):
        return f"LexRule(Name:[{self.name}] , Pattern:[{self.pattern.pattern}])"


# aie_runtime_control<id>.asm
FILENAME_RULE = LexRule("filename", r"aie_runtime_control(\d+)\.asm", re.ASCII, full_match=True)

# SAVE_TIMESTAMPS or SAVE_TIMESTAMPS <number>, anywhere on the line
SAVE_TIMESTAMPS_RULE = LexRule("save_timestamps", r"SAVE_TIMESTAMPS\s*(\d*)", re.IGNORECASE | re.ASCII)


class MarkerToken:
    def __init__(self, line_number:int , index:int = NO_INDEX):
        self.line_number = line_number
        self.index = index

    def has_index(self) -> bool:
        return self.index != NO_INDEX

    def __repr__(self):
        return f"MarkerToken(Line:[{self.line_number}] , Index:[{self.index}])"


class AsmLexer:
    """
    Line lexer for aie_runtime_control assembly listings.
    """
    def __init__(self, rule:LexRule = SAVE_TIMESTAMPS_RULE):
        self.rule = rule
        self.toks = []
        self.line_number = 0

    def do_lexing(self, line:str) -> Optional[MarkerToken]:
        self.line_number += 1
        m = self.rule.match(line)
        if m is None:
            return None
        digits = m.group(1)
        index = int(digits) if digits else NO_INDEX
        return MarkerToken(self.line_number, index)

    def lexer(self, lines) -> List[MarkerToken]:
        self.toks = []
        self.line_number = 0
        for line in lines:
            tok = self.do_lexing(line)
            if tok:
                self.toks.append(tok)
        return self.toks


def match_control_filename(name:str) -> Optional[int]:
    """
    return the tile-group id encoded in a control file name, or None
    """
    m = FILENAME_RULE.match(name)
    if m is None:
        return None
    return int(m.group(1))


def lex_markers(text:str) -> List[Tuple[int,int]]:
    """
    return (line_number, index) for every marker in `text`
    """
    return [(tok.line_number, tok.index) for tok in AsmLexer().lexer(io.StringIO(text, newline="\n"))]
