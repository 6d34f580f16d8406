"""
Data loaders for filing register files
"""

import json
import pandas as pd
from pathlib import Path
from typing import List, Dict

from pydantic import ValidationError

from models.filing import FilingRecord
from utils.exceptions import InvalidRegisterError


class FilingRegisterLoader:
    """
    Load filing records from a CSV or JSON register

    CSV: one row per client-period, columns named after FilingRecord fields.
    JSON: a list of records, or {"filings": [...]}.
    """

    def __init__(self, register_path: str):
        self.register_path = Path(register_path)
        self.records = self._load_records()

    def _load_records(self) -> List[FilingRecord]:
        if not self.register_path.exists():
            raise FileNotFoundError(f"Filing register not found: {self.register_path}")

        suffix = self.register_path.suffix.lower()
        if suffix == '.csv':
            rows = self._read_csv()
        elif suffix == '.json':
            rows = self._read_json()
        else:
            raise InvalidRegisterError(
                f"Unsupported register format: {suffix or '(none)'}",
                {'path': str(self.register_path)},
            )

        records = []
        for idx, row in enumerate(rows, 1):
            if not isinstance(row, dict):
                raise InvalidRegisterError(f"Row {idx} of {self.register_path.name} must be an object", {'row': idx})
            try:
                records.append(FilingRecord(**row))
            except ValidationError as e:
                raise InvalidRegisterError(
                    f"Row {idx} of {self.register_path.name} is not a valid filing record: {e}",
                    {'row': idx},
                )
        return records

    def _read_csv(self) -> List[Dict]:
        # Read everything as text; the model does the type coercion
        df = pd.read_csv(self.register_path, dtype=str, keep_default_na=False)
        df.columns = [c.strip() for c in df.columns]

        rows = []
        for raw in df.to_dict(orient='records'):
            rows.append({k: v.strip() for k, v in raw.items() if v is not None and v.strip() != ''})
        return rows

    def _read_json(self) -> List[Dict]:
        with open(self.register_path) as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get('filings', [])
        if not isinstance(data, list):
            raise InvalidRegisterError(
                "JSON register must be a list of filings or {\"filings\": [...]}",
                {'path': str(self.register_path)},
            )
        return data

    def get_by_client(self, client_id: str) -> List[FilingRecord]:
        """Get all records for one client"""
        return [r for r in self.records if r.client_id == client_id]

    def get_by_month(self, month: str) -> List[FilingRecord]:
        """Get all records for one period"""
        return [r for r in self.records if r.month == month]

    def client_ids(self) -> List[str]:
        seen = []
        for r in self.records:
            if r.client_id not in seen:
                seen.append(r.client_id)
        return seen
