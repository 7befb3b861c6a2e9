"""
Tab-separated input and output files.

Every input file starts with a header row that is discarded. Rows are handed
on as lists of string fields together with their 1-based line number so that
format errors can point at the offending line.
"""

import csv
import logging
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from actorgraph.errors import FileOpenError, FormatError

logger = logging.getLogger("actorgraph.records")

Row = Tuple[int, List[str]]


@contextmanager
def open_input(path):
    """Open *path* for reading, raising FileOpenError instead of OSError."""
    try:
        f = open(path, "r", newline="", encoding="utf-8")
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e
    with f:
        yield f


@contextmanager
def open_output(path):
    """Open *path* for writing, raising FileOpenError instead of OSError."""
    try:
        f = open(path, "w", newline="", encoding="utf-8")
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e
    with f:
        yield f


def iter_rows(f) -> Iterator[Row]:
    """
    Yield (line_number, fields) for every row after the header.

    Args:
        f: Open text file positioned at the header row

    Returns:
        Iterator of (line_number, list of tab-separated fields)
    """
    reader = csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE)
    next(reader, None)
    for fields in reader:
        yield reader.line_num, fields


def read_rows(path) -> List[Row]:
    with open_input(path) as f:
        rows = list(iter_rows(f))
    logger.debug("Read %d rows from %s", len(rows), path)
    return rows


def read_pairs(path) -> List[Tuple[str, str]]:
    """
    Read (start actor, end actor) query pairs.

    Raises:
        FormatError: a row does not have exactly two fields
    """
    pairs = []
    for line_number, fields in read_rows(path):
        if len(fields) != 2:
            raise FormatError(line_number, 2, len(fields), source=path)
        pairs.append((fields[0], fields[1]))
    return pairs


def read_targets(path) -> List[str]:
    """
    Read one target actor name per line.

    Names are taken verbatim (tabs included). A blank line is a format error
    since it cannot name an actor.
    """
    targets = []
    with open_input(path) as f:
        next(f, None)
        for line_number, line in enumerate(f, start=2):
            name = line.rstrip("\r\n")
            if not name:
                raise FormatError(line_number, 1, 0, source=path)
            targets.append(name)
    return targets
