"""
SUBMISSION HISTORY
SQLite store for calculation submissions (site input + results)
Supports save by id, retrieval by id and listing of recent submissions
"""

import sqlite3
import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, List
from dataclasses import dataclass
import logging

from varsha_core.config.settings import SUBMISSION_DB_PATH, HISTORY_DEFAULT_LIMIT, MODEL_VERSION
from varsha_core.models.site import AnySiteInput, site_input_from_dict
from varsha_core.models.results import CalculationResult

logger = logging.getLogger(__name__)


@dataclass
class Submission:
    """One stored calculation"""
    id: str
    calculation_type: str
    site_input: AnySiteInput
    results: Dict
    created_at: str
    model_version: str = MODEL_VERSION

    def summary(self) -> Dict:
        """History row: identity, site and headline results"""
        row = {
            'id': self.id,
            'calculation_type': self.calculation_type,
            'name': self.site_input.name,
            'location': self.site_input.location,
            'created_at': self.created_at,
            'feasibility_level': self.results.get('feasibility_level'),
        }
        # Coverage only exists for harvesting
        if 'coverage_percentage' in self.results:
            row['coverage_percentage'] = self.results['coverage_percentage']
        return row


class SubmissionStore:
    """SQLite database of calculation submissions"""

    def __init__(self, db_path: str = SUBMISSION_DB_PATH):
        """Initialize submission database"""
        self.db_path = str(db_path)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._initialize_database()

    def _initialize_database(self):
        """Create tables if not exist"""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS submissions (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT UNIQUE NOT NULL,
                calculation_type TEXT NOT NULL,
                name TEXT,
                location TEXT,
                pincode TEXT,
                site_json TEXT NOT NULL,
                results_json TEXT NOT NULL,
                model_version TEXT,
                created_at TIMESTAMP
            )
        ''')

        conn.commit()
        conn.close()
        logger.info(f"Initialized submission database: {self.db_path}")

    def save_submission(self, site_input: AnySiteInput, calculation_type: str,
                        results: CalculationResult) -> Submission:
        """
        Store one calculation

        Args:
            site_input: the validated input the results were computed from
            calculation_type: 'rainwater' or 'recharge'
            results: engine output

        Returns:
            The stored Submission with its generated id

        Raises:
            ValueError: if calculation_type does not match the input or results
        """
        if site_input.mode != calculation_type or results.calculation_type != calculation_type:
            raise ValueError(
                f"Calculation type {calculation_type!r} does not match input "
                f"({site_input.mode!r}) or results ({results.calculation_type!r})"
            )

        submission = Submission(
            id=str(uuid.uuid4()),
            calculation_type=calculation_type,
            site_input=site_input,
            results=results.to_dict(),
            created_at=datetime.now().isoformat(),
        )

        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        try:
            cursor.execute('''
                INSERT INTO submissions
                (id, calculation_type, name, location, pincode,
                 site_json, results_json, model_version, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                submission.id, calculation_type, site_input.name, site_input.location,
                site_input.pincode, json.dumps(site_input.to_dict()),
                json.dumps(submission.results, default=str),
                submission.model_version, submission.created_at
            ))
            conn.commit()
            logger.info(f"Saved {calculation_type} submission {submission.id} for {site_input.location}")
            return submission

        except Exception as e:
            logger.error(f"Failed to save submission: {e}")
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def _row_to_submission(row) -> Submission:
        submission_id, calculation_type, site_json, results_json, model_version, created_at = row
        return Submission(
            id=submission_id,
            calculation_type=calculation_type,
            site_input=site_input_from_dict(json.loads(site_json), calculation_type),
            results=json.loads(results_json),
            created_at=created_at,
            model_version=model_version,
        )

    def get_submission(self, submission_id: str) -> Optional[Submission]:
        """Fetch one submission, None if the id is unknown"""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        try:
            row = cursor.execute('''
                SELECT id, calculation_type, site_json, results_json, model_version, created_at
                FROM submissions WHERE id = ?
            ''', (submission_id,)).fetchone()
        finally:
            conn.close()

        if row is None:
            logger.debug(f"Submission {submission_id} not found")
            return None
        return self._row_to_submission(row)

    def get_recent_submissions(self, limit: int = HISTORY_DEFAULT_LIMIT) -> List[Submission]:
        """Most recent submissions first"""
        if limit < 1:
            return []

        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        try:
            rows = cursor.execute('''
                SELECT id, calculation_type, site_json, results_json, model_version, created_at
                FROM submissions ORDER BY seq DESC LIMIT ?
            ''', (limit,)).fetchall()
        finally:
            conn.close()

        return [self._row_to_submission(row) for row in rows]

    def history(self, limit: int = HISTORY_DEFAULT_LIMIT) -> List[Dict]:
        """Summary rows for the recent submissions"""
        return [submission.summary() for submission in self.get_recent_submissions(limit)]

    def count(self) -> int:
        conn = sqlite3.connect(self.db_path)
        try:
            return conn.execute('SELECT COUNT(*) FROM submissions').fetchone()[0]
        finally:
            conn.close()
