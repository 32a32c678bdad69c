"""
Report rendering for analysis results
"""

import json
from typing import List

from .models import AnalysisResult, DuplicateFinding

COLUMN_WIDTH = 30
RULE_WIDTH = 54


def format_cycle(chain: List[str]) -> str:
    return ' -> '.join(chain)


def format_duplicates(module: str, findings: List[DuplicateFinding]) -> str:
    """Two-column duplicate/owner table for one module"""
    lines = [
        f"Found duplicate dependencies for {module}",
        f"{'duplicate':<{COLUMN_WIDTH}}owner",
        '-' * RULE_WIDTH,
    ]
    for finding in findings:
        lines.append(f"{finding.duplicate:<{COLUMN_WIDTH}}{finding.owner}")
    lines.append('-' * RULE_WIDTH)
    return '\n'.join(lines) + '\n'


def render_text(result: AnalysisResult) -> str:
    if result.cycles_found:
        return f"Found the following cyclical dependency: {format_cycle(result.chain)}"

    if not result.duplicates:
        return "No duplicate dependencies found."

    return '\n'.join(
        format_duplicates(module, findings) for module, findings in result.duplicates.items()
    )


def render_json(result: AnalysisResult) -> str:
    return json.dumps(result.to_dict(), indent=2)
