"""
examplanner/config.py

Allotment settings, read from a two-column `parameter,value` CSV.
"""

import os
from dataclasses import dataclass, fields
import pandas as pd
from . import utils

TRUE_VALUES = {"true", "yes", "1", "on"}
FALSE_VALUES = {"false", "no", "0", "off"}


@dataclass
class AllotmentConfig:
    """Settings for one allotment run."""
    # Sort each course queue by roll number before seating
    roll_number_order: bool = True
    # 'capacity' or 'occupancy': what the invigilator count is derived from
    headcount_basis: str = utils.HEADCOUNT_CAPACITY
    # Re-check the bench rule on every plan and abort on a violation
    verify_plans: bool = True
    sample_students: int = 400
    sample_invigilators: int = 40
    sample_seed: int = 7

    def __post_init__(self):
        if self.headcount_basis not in utils.HEADCOUNT_BASES:
            raise ValueError(
                f"headcount_basis must be one of {utils.HEADCOUNT_BASES}, got '{self.headcount_basis}'"
            )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for '{name}': '{raw}'")

def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid integer for '{name}': '{raw}'")


def load_config(filepath: str) -> AllotmentConfig:
    """
    Loads allotment_config.csv. A missing file gives the defaults.
    Unknown parameters are skipped with a warning.
    """
    if not os.path.exists(filepath):
        print(f"⚠ Warning: {filepath} not found, using default allotment settings")
        return AllotmentConfig()

    df = pd.read_csv(filepath, dtype=str)
    df.columns = df.columns.str.strip()
    if 'parameter' not in df.columns or 'value' not in df.columns:
        raise ValueError(f"{filepath} must have 'parameter' and 'value' columns")

    field_types = {f.name: f.type for f in fields(AllotmentConfig)}
    values = {}
    for _, row in df.iterrows():
        name = str(row['parameter']).strip()
        raw = "" if pd.isna(row['value']) else str(row['value'])
        if name not in field_types:
            print(f"⚠ Warning: Unknown config parameter '{name}' ignored")
            continue
        kind = field_types[name]
        if kind in (bool, 'bool'):
            values[name] = _parse_bool(name, raw)
        elif kind in (int, 'int'):
            values[name] = _parse_int(name, raw)
        else:
            values[name] = raw.strip()

    config = AllotmentConfig(**values)
    print(f"✓ Loaded allotment settings from {filepath}")
    return config
