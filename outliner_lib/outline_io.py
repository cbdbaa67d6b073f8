"""
outliner_lib/outline_io.py: Plain-text outline format.

One line per item: (level - 1) tab characters, then tab-separated fields
'text', 'page' and, when y is known, 'y' or 'x,y' rounded to integers.
"""
import logging
import math

from .errors import OutlineFormatError
from .models import OutlineItem
from .util import round_half_up

log_io = logging.getLogger("outliner.io")


def outline_item_to_str(item) -> str:
    entries = [item.text, str(item.page)]
    if item.y is not None:
        if item.x is not None:
            entries.append(f"{round_half_up(item.x)},{round_half_up(item.y)}")
        else:
            entries.append(str(round_half_up(item.y)))
    return "\t" * (item.level - 1) + "\t".join(entries)


def outline_to_str(outline) -> str:
    """Serializes an outline to the tab-indented text format."""
    return "\n".join(outline_item_to_str(item) for item in outline)


def _parse_number(value, line_no, line):
    try:
        number = float(value)
    except ValueError:
        number = math.nan
    if not math.isfinite(number):
        raise OutlineFormatError(f"invalid coordinate '{value}'", line_no, line)
    return int(number) if number.is_integer() else number


def parse_outline_line(line, line_no=None) -> OutlineItem:
    info = line.lstrip("\t")
    level = 1 + len(line) - len(info)
    fields = info.split("\t")
    if len(fields) < 2:
        raise OutlineFormatError("missing page number", line_no, line)
    if len(fields) > 3:
        raise OutlineFormatError("too many fields", line_no, line)
    text, page_str = fields[0], fields[1]
    try:
        page = int(page_str)
    except ValueError:
        raise OutlineFormatError(f"invalid page number '{page_str}'", line_no, line)

    x = y = None
    if len(fields) == 3:
        coords = fields[2].split(",")
        if len(coords) == 1:
            # only y is provided
            y = _parse_number(coords[0], line_no, line)
        elif len(coords) == 2:
            x = _parse_number(coords[0], line_no, line)
            y = _parse_number(coords[1], line_no, line)
        else:
            raise OutlineFormatError(f"invalid coordinates '{fields[2]}'", line_no, line)
    return OutlineItem(level, text, page, x, y)


def parse_outline_str(content):
    """Parses the tab-indented text format back into OutlineItems."""
    outline = []
    for line_no, line in enumerate(content.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        outline.append(parse_outline_line(line, line_no))
    return outline


def read_outline_file(path):
    with open(path, "r", encoding="utf-8") as f:
        outline = parse_outline_str(f.read())
    log_io.info("Read %d outline item(s) from %s", len(outline), path)
    return outline


def write_outline_file(path, outline):
    with open(path, "w", encoding="utf-8") as f:
        f.write(outline_to_str(outline))
    log_io.info("Wrote %d outline item(s) to %s", len(outline), path)
