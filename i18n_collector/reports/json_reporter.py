"""JSON report generator."""

import json
from pathlib import Path
from datetime import datetime
from typing import List, Optional

from ..__version__ import __version__
from ..core.aggregator import KeyCollision
from ..features.diff import DiffResult
from ..utils.logging import get_logger

logger = get_logger('reports.json')


class JSONReporter:
    """Generate JSON reports for fragment diffs."""

    @staticmethod
    def build(
        result: DiffResult,
        collisions: Optional[List[KeyCollision]] = None,
        baseline: Optional[str] = None,
    ) -> dict:
        """
        Build the report structure.

        Args:
            result: Diff result
            collisions: Key collisions seen while aggregating
            baseline: Identifier of the baseline input, if any

        Returns:
            Report dictionary
        """
        return {
            'metadata': {
                'generated_at': datetime.now().isoformat(),
                'version': __version__,
                'baseline': baseline,
            },
            'summary': result.summary(),
            'added': list(result.added),
            'removed': list(result.removed),
            'common': list(result.common),
            'collisions': [
                {
                    'key': c.key,
                    'previous_module': c.previous_module,
                    'previous_value': c.previous_value,
                    'module': c.module,
                    'value': c.value,
                }
                for c in (collisions or [])
            ],
        }

    @staticmethod
    def generate(
        result: DiffResult,
        output_path: Optional[Path] = None,
        collisions: Optional[List[KeyCollision]] = None,
        baseline: Optional[str] = None,
        pretty: bool = True
    ) -> Path:
        """
        Write the JSON report.

        Args:
            result: Diff result
            output_path: Output file path
            collisions: Key collisions seen while aggregating
            baseline: Identifier of the baseline input, if any
            pretty: Pretty print JSON

        Returns:
            Path to generated report
        """
        if output_path is None:
            output_path = Path.cwd() / 'i18n.json'

        report = JSONReporter.build(result, collisions=collisions, baseline=baseline)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(report, f, indent=2, ensure_ascii=False)
            else:
                json.dump(report, f, ensure_ascii=False)

        logger.info(f"JSON report: {output_path}")
        return output_path

    @staticmethod
    def load(report_path: Path) -> dict:
        """Load a JSON report from file."""
        with open(report_path, 'r', encoding='utf-8') as f:
            return json.load(f)
