import yaml
from pathlib import Path
from typing import Union
from fairshift.models import AssignmentConfig
from fairshift.utils import parse_date


def config_from_dict(raw: dict) -> AssignmentConfig:
    raw = dict(raw or {})
    if "extra_holidays" in raw:
        raw["extra_holidays"] = [parse_date(d) for d in raw.get("extra_holidays") or []]
        if None in raw["extra_holidays"]:
            raise ValueError("extra_holidays contains a date that can't be parsed")
    return AssignmentConfig.model_validate(raw)


def load_config(path: Union[str, Path]) -> AssignmentConfig:
    """Read a run configuration YAML file; missing keys keep their defaults."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return config_from_dict(raw)
