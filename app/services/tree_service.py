# app/services/tree_service.py
"""
Tree service: runs one generation + slice analysis pass for the UI.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from leonardo_rule.model import TreeParams
from leonardo_rule.generative import generate_tree
from leonardo_rule.analysis import analyze_slice, tree_summary
from leonardo_rule.validation import InvalidParameterError, validate_params


logger = logging.getLogger(__name__)


class TreeService:
    """Service for generating and measuring single trees."""

    @staticmethod
    def generate_and_analyze(
        params: TreeParams,
        slice_height: float,
        seed: Optional[int] = None,
    ) -> Tuple[bool, Dict[str, Any], str]:
        """
        Generate a tree and measure it at one height.

        A full pass is one synchronous unit of work; nothing is cached
        between calls.

        Args:
            params: Tree parameters (validated against the documented ranges)
            slice_height: Measuring height above the trunk base
            seed: Random seed; None grows a different tree every call

        Returns:
            success: bool
            result: dict with branches, total_volume, trunk_area, slice, summary
            error: str (empty if success)
        """
        try:
            validate_params(params)
            rng = np.random.default_rng(seed)
            branches, total_volume, trunk_area = generate_tree(params, rng)
            stats = analyze_slice(branches, trunk_area, slice_height)
        except InvalidParameterError as e:
            return False, {}, f"Invalid parameters: {'; '.join(e.problems)}"
        except Exception as e:
            logger.exception("Tree generation failed")
            return False, {}, f"Error: {str(e)}"

        result = {
            'params': params,
            'seed': seed,
            'branches': branches,
            'total_volume': total_volume,
            'trunk_area': trunk_area,
            'slice': stats,
            'summary': tree_summary(branches, total_volume, trunk_area),
        }
        return True, result, ""

    @staticmethod
    def reslice(result: Dict[str, Any], slice_height: float) -> Dict[str, Any]:
        """Re-measure an existing tree at a new height without regenerating it."""
        stats = analyze_slice(result['branches'], result['trunk_area'], slice_height)
        return {**result, 'slice': stats}
