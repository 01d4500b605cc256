from __future__ import annotations

import csv
import io
from typing import Any, Dict, Iterable, Iterator, List


def csv_stream(rows: Iterable[Dict[str, Any]], fieldnames: List[str]) -> Iterator[bytes]:
    """
    Stream CSV as bytes without holding full file in memory.
    A UTF-8 BOM leads the first chunk so spreadsheet apps keep accents intact.
    """
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    yield ("\ufeff" + buf.getvalue()).encode("utf-8")
    buf.seek(0)
    buf.truncate(0)

    for r in rows:
        writer.writerow(r)
        yield buf.getvalue().encode("utf-8")
        buf.seek(0)
        buf.truncate(0)
