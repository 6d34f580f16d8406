"""
Configuration management
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from utils.exceptions import ComplianceEngineError, ExceptionCode

# Load environment variables
load_dotenv()


# Statutory defaults (CGST Act s.47 late fee, s.50 interest, QRMP notification dates)
DEFAULT_RULES: Dict[str, Dict[str, Any]] = {
    'due_dates': {
        'monthly_gstr1_day': 11,
        'monthly_gstr3b_day': 20,
        'quarterly_gstr1_day': 13,
        'quarterly_gstr3b_day': 24,
        'quarterly_gstr3b_day_large': 22,
        'interim_gstr1_day': 13,
        'interim_gstr3b_day': 25,
        'qrmp_turnover_threshold': 50_000_000,
    },
    'late_fee': {
        'per_day': 50,
        'nil_per_day': 20,
        'cap': 10_000,
    },
    'interest': {
        'annual_rate': 0.18,
        'days_in_year': 365,
    },
    'reminders': {
        'lead_days': 5,
        'channels': ['email', 'dashboard'],
    },
    'reconciliation': {
        'tolerance': 0.01,
        'discrepancy_percentage_threshold': 5,
        'absolute_discrepancy_threshold': 10_000,
        'pending_itc_threshold': 50_000,
        'rejected_itc_threshold': 25_000,
    },
}

# env var -> (section, key, type)
ENV_OVERRIDES = {
    'GST_LATE_FEE_PER_DAY': ('late_fee', 'per_day', int),
    'GST_NIL_LATE_FEE_PER_DAY': ('late_fee', 'nil_per_day', int),
    'GST_LATE_FEE_CAP': ('late_fee', 'cap', int),
    'GST_INTEREST_RATE': ('interest', 'annual_rate', float),
    'GST_REMINDER_LEAD_DAYS': ('reminders', 'lead_days', int),
    'GST_QRMP_TURNOVER_THRESHOLD': ('due_dates', 'qrmp_turnover_threshold', int),
}


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, (section, key, cast) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw == '':
            continue
        try:
            config.setdefault(section, {})[key] = cast(raw)
        except ValueError:
            raise ComplianceEngineError(
                f"Environment variable {env_name} must be {cast.__name__}, got {raw!r}",
                ExceptionCode.CONFIGURATION_ERROR,
                {'variable': env_name},
            )
    if os.getenv('LOG_LEVEL'):
        config.setdefault('logging', {})['level'] = os.getenv('LOG_LEVEL')
    return config


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file, layered over the statutory defaults"""

    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file) as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ComplianceEngineError(
            f"Configuration file {config_path} must contain a mapping",
            ExceptionCode.CONFIGURATION_ERROR,
        )

    # The file may nest everything under a top-level 'rules' key
    rules = loaded.pop('rules', {}) or {}
    config = _merge(DEFAULT_RULES, _merge(loaded, rules))
    return _apply_env_overrides(config)


def load_config_or_defaults(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration, falling back to defaults when the file is absent"""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return _apply_env_overrides(copy.deepcopy(DEFAULT_RULES))


def get_section(config: Optional[Dict[str, Any]], section: str) -> Dict[str, Any]:
    """Return one rules section with defaults filled in for any missing keys"""
    defaults = DEFAULT_RULES.get(section, {})
    if not config:
        return dict(defaults)
    return _merge(defaults, config.get(section) or {})
