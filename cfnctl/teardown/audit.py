"""Audit storage for teardown runs.

Stores one YAML record per run alongside the terminal transcripts.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml

from cfnctl.models.teardown_run import TeardownRun


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() + "Z" if value else None


class AuditStorage:
    """Teardown run record storage.

    Storage structure:
        ./logs/delete-all-stacks/
            2025/
                11/
                    run-run_123.yaml

    Attributes:
        storage_dir: Base directory for run records
    """

    def __init__(self, storage_dir: str) -> None:
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def log_run(self, run: TeardownRun) -> Path:
        """Write a run record.

        Overwrites an existing record with the same run ID.

        Args:
            run: Finished teardown run

        Returns:
            Path of the written record
        """
        year_month_dir = self.storage_dir / str(run.started_at.year) / f"{run.started_at.month:02d}"
        year_month_dir.mkdir(parents=True, exist_ok=True)

        audit_data = {
            "metadata": {
                "version": "1.0",
                "log_type": "account_teardown",
                "created_at": _iso(datetime.utcnow()),
            },
            "run": {
                "run_id": run.run_id,
                "account_id": run.account_id,
                "region": run.region,
                "caller_arn": run.caller_arn,
                "aws_profile": run.aws_profile,
                "status": run.status.value,
                "started_at": _iso(run.started_at),
                "completed_at": _iso(run.completed_at),
                "duration_seconds": run.duration_seconds,
            },
            "stacks": [
                {
                    "name": result.stack.name,
                    "stack_id": result.stack.stack_id,
                    "status": result.status.value,
                    "stack_status": result.stack_status,
                    "reason": result.reason,
                }
                for result in run.stack_results
            ],
            "sweep": [
                {
                    "category": category.category,
                    "discovered": [str(item) for item in category.discovered],
                    "confirmed": category.confirmed,
                    "records": [
                        {
                            "item": str(record.item),
                            "status": record.status.value,
                            "timestamp": _iso(record.timestamp),
                            "error_code": record.error_code,
                            "error_message": record.error_message,
                            "skip_reason": record.skip_reason,
                        }
                        for record in category.records
                    ],
                }
                for category in run.sweep.categories
            ],
        }

        audit_file = year_month_dir / f"run-{run.run_id}.yaml"
        with open(audit_file, "w") as f:
            yaml.dump(audit_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

        return audit_file

    def get_run(self, run_id: str) -> Optional[dict]:
        """Retrieve a run record by ID.

        Args:
            run_id: Run ID to retrieve

        Returns:
            Record dictionary if found, None otherwise
        """
        for audit_file in self.storage_dir.glob(f"*/*/run-{run_id}.yaml"):
            with open(audit_file, "r") as f:
                return yaml.safe_load(f)

        return None
