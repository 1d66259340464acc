from __future__ import annotations

from typing import Iterable, Iterator, List

DEFAULT_DELIMITER = ","


def split_record(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Split one raw line into ordered fields.

    There is no quoting or escaping: a value containing the delimiter is
    not representable. Trailing empty fields are dropped, so `1,a,,`
    reads the same as `1,a`.

    Args:
        line (str): Raw line without its line terminator.
        delimiter (str): Field delimiter.

    Returns:
        List[str]: Fields in order.
    """
    fields = line.split(delimiter)
    while len(fields) > 1 and fields[-1] == "":
        fields.pop()
    return fields


def iter_records(lines: Iterable[str], delimiter: str = DEFAULT_DELIMITER) -> Iterator[List[str]]:
    """
    Turn an iterable of raw lines into field lists.

    Line terminators are stripped and blank lines are skipped. Lines are
    consumed lazily, one at a time.
    """
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        yield split_record(line, delimiter)


def read_records(file_path: str, delimiter: str = DEFAULT_DELIMITER, encoding: str = "utf-8-sig") -> Iterator[List[str]]:
    """
    Stream a delimited text file as field lists.

    The file is read forward once and closed when the generator is
    exhausted or closed.

    Args:
        file_path (str): Path to the text file.
        delimiter (str): Field delimiter.
        encoding (str): File encoding.

    Returns:
        Iterator[List[str]]: Records in file order.
    """
    with open(file_path, "r", encoding=encoding, newline="") as f:
        yield from iter_records(f, delimiter)
