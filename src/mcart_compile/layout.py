from __future__ import annotations

import hashlib
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from mcart_core.cartridge import CartridgeCodec, GameFile

SECTIONS_SCHEMA = pa.schema(
    [
        ("section", pa.string()),
        ("index", pa.int32()),
        ("offset", pa.int64()),
        ("length", pa.int32()),
        ("content_hash", pa.string()),
    ]
)


def section_rows(game: GameFile, codec: CartridgeCodec) -> list[dict]:
    """One row per body section: where it sits in the encoded file and its sha256."""
    banks = {
        "main_code": [game.main_code],
        "code_bank": game.code_banks,
        "atlas": game.atlases,
        "controller_graphics": game.controller_graphics,
    }
    rows: list[dict] = []
    for section, index, offset, length in codec.section_offsets(game):
        rows.append(
            {
                "section": section,
                "index": int(index),
                "offset": int(offset),
                "length": int(length),
                "content_hash": hashlib.sha256(banks[section][index]).hexdigest(),
            }
        )
    return rows


def write_layout(rows: list[dict], out_path: Path) -> Path:
    """Write layout/sections.parquet under ``out_path``."""
    (Path(out_path) / "layout").mkdir(parents=True, exist_ok=True)
    target = Path(out_path) / "layout/sections.parquet"

    df = pd.DataFrame(rows, columns=SECTIONS_SCHEMA.names)
    table = pa.Table.from_pandas(df, schema=SECTIONS_SCHEMA, preserve_index=False)
    pq.write_table(table, target)
    return target
