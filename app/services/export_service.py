# app/services/export_service.py
"""
Export service: branch tables and model JSON for download.
"""

import csv
import io
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from leonardo_rule.model import Branch, SliceStats


BRANCH_COLUMNS = [
    'branch_id',
    'start_x', 'start_y', 'start_z',
    'end_x', 'end_y', 'end_z',
    'radius', 'length', 'area', 'volume',
    'depth', 'main_path',
]


class ExportService:
    """Service for exporting tree data to various formats."""

    @staticmethod
    def generate_branches_csv(branches: List[Branch]) -> str:
        """
        Generate a CSV table with one row per branch, in generation order.

        Returns CSV content as a string.
        """
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(BRANCH_COLUMNS)

        for i, b in enumerate(branches):
            writer.writerow([
                i,
                round(b.start[0], 4), round(b.start[1], 4), round(b.start[2], 4),
                round(b.end[0], 4), round(b.end[1], 4), round(b.end[2], 4),
                round(b.radius, 5),
                round(b.length, 4),
                round(b.area, 6),
                round(b.volume, 6),
                b.depth,
                int(b.is_main_path),
            ])

        return output.getvalue()

    @staticmethod
    def generate_model_json(
        branches: List[Branch],
        params: Dict[str, Any],
        summary: Dict[str, Any],
        slice_stats: SliceStats = None,
    ) -> str:
        """
        Generate JSON model data for interchange.

        Returns JSON content as a string.
        """
        branches_data = [
            {
                'id': i,
                'start': list(b.start),
                'end': list(b.end),
                'radius': b.radius,
                'depth': b.depth,
                'volume': b.volume,
                'is_main_path': b.is_main_path,
            }
            for i, b in enumerate(branches)
        ]

        model = {
            'version': '1.0',
            'type': 'leonardo_tree',
            'parameters': params,
            'summary': summary,
            'geometry': {
                'branches': branches_data,
            },
        }
        if slice_stats is not None:
            model['slice'] = slice_stats.to_dict()

        return json.dumps(model, indent=2)

    @staticmethod
    def generate_summary_text(params: Dict[str, Any], summary: Dict[str, Any], slice_stats: SliceStats) -> str:
        """Generate a plain-text summary of the tree and the current slice."""
        lines = [
            "LEONARDO TREE SUMMARY",
            "=" * 40,
            "",
            "PARAMETERS",
            f"  Species:        {params.get('species', 'N/A')}",
            f"  Depth:          {params.get('depth', 0)}",
            f"  Angle:          {params.get('branching_angle', 0):.1f} deg",
            f"  Length ratio:   {params.get('length_ratio', 0):.2f}",
            f"  Exponent (n):   {params.get('exponent', 0):.2f}",
            f"  Trunk radius:   {params.get('trunk_thickness', 0):.2f}",
            f"  Limb scale:     {params.get('branch_thickness', 0):.2f}",
            "",
            "STRUCTURE",
            f"  Branches:       {summary.get('n_branches', 0)}",
            f"  Main path:      {summary.get('n_main_path', 0)}",
            f"  Leaves:         {summary.get('n_leaves', 0)}",
            f"  Height:         {summary.get('tree_height', 0):.2f}",
            f"  Volume:         {summary.get('volume', 0):.4f}",
            "",
            "SLICE",
            f"  Height:         {slice_stats.height:.2f}",
            f"  Trunk area:     {slice_stats.trunk_area:.4f}",
            f"  Branch sum:     {slice_stats.current_sum:.4f}",
            f"  Branches cut:   {slice_stats.branch_count}",
            f"  Ratio:          {slice_stats.conservation_ratio:.3f}",
        ]

        return "\n".join(lines)
