"""Card counting tables and running count arithmetic."""

from core.counting.base import (
    RankValueTable,
    apply,
    is_balanced,
    table_sum,
    true_count,
    value_of,
)
from core.counting.hilo import DEFAULT_TABLE, HILO_TABLE
from core.counting.ko import KO_TABLE
from core.counting.omega2 import OMEGA2_TABLE

PRESET_TABLES: dict[str, RankValueTable] = {
    "hilo": HILO_TABLE,
    "ko": KO_TABLE,
    "omega2": OMEGA2_TABLE,
}

__all__ = [
    "RankValueTable",
    "DEFAULT_TABLE",
    "HILO_TABLE",
    "KO_TABLE",
    "OMEGA2_TABLE",
    "PRESET_TABLES",
    "apply",
    "is_balanced",
    "table_sum",
    "true_count",
    "value_of",
]
