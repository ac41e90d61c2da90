# api/main.py
"""
FastAPI backend for Leonardo's Rule - exposes the leonardo_rule engine as REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Any
import sys
from pathlib import Path
import logging

import numpy as np

# Add project root to path to import leonardo_rule
sys.path.insert(0, str(Path(__file__).parent.parent))

from leonardo_rule.model import TreeParams, TreeSpecies
from leonardo_rule.species import SPECIES_DEFAULTS, SPECIES_INFO, is_conic
from leonardo_rule.generative import generate_tree
from leonardo_rule.analysis import analyze_slice, slice_profile, profile_heights, tree_summary
from leonardo_rule.validation import InvalidParameterError
from app.services import ExportService, get_tree_insights


logger = logging.getLogger(__name__)


app = FastAPI(
    title="Leonardo's Rule API",
    description="Recursive branching and cross-section conservation engine",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class TreeParamsIn(BaseModel):
    """Input parameters for tree generation (documented ranges enforced here)."""
    branching_angle: float = Field(25.0, ge=0.0, le=90.0, description="Lateral branching angle (deg)")
    depth: int = Field(7, ge=0, le=12, description="Branching levels above the trunk")
    length_ratio: float = Field(0.88, gt=0.0, lt=1.0, description="Child/parent length ratio")
    exponent: float = Field(2.1, gt=1.0, le=4.0, description="Leonardo exponent n")
    trunk_thickness: float = Field(0.45, gt=0.0, le=2.0, description="Trunk base radius")
    branch_thickness: float = Field(1.0, gt=0.0, le=2.0, description="Child radius multiplier")
    species: TreeSpecies = Field(TreeSpecies.COAST_REDWOOD, description="Reference species")
    randomness: float = Field(0.05, ge=0.0, le=10.0, description="Angular jitter (rad)")
    seed: Optional[int] = Field(None, ge=0, description="Random seed (None = new silhouette)")

    def to_params(self) -> TreeParams:
        return TreeParams(
            branching_angle=self.branching_angle,
            depth=self.depth,
            length_ratio=self.length_ratio,
            exponent=self.exponent,
            trunk_thickness=self.trunk_thickness,
            branch_thickness=self.branch_thickness,
            species=self.species,
            randomness=self.randomness,
        )


class SliceRequest(BaseModel):
    """Tree parameters plus a measuring height."""
    params: TreeParamsIn = Field(default_factory=TreeParamsIn)
    slice_height: float = Field(3.5, description="Height above trunk base")


class ProfileRequest(BaseModel):
    """Tree parameters plus the number of evenly spaced heights."""
    params: TreeParamsIn = Field(default_factory=TreeParamsIn)
    n_heights: int = Field(50, ge=2, le=500)


class BranchData(BaseModel):
    """Branch geometry data."""
    start: List[float]
    end: List[float]
    radius: float
    depth: int
    volume: float
    is_main_path: bool


class SliceData(BaseModel):
    """Slice statistics."""
    trunk_area: float
    current_sum: float
    branch_count: int
    branch_areas: List[float]
    height: float
    conservation_ratio: float


class TreeResult(BaseModel):
    """Complete generation result."""
    success: bool
    error: Optional[str] = None
    branches: Optional[List[BranchData]] = None
    total_volume: Optional[float] = None
    trunk_area: Optional[float] = None
    summary: Optional[Dict[str, Any]] = None
    slice: Optional[SliceData] = None
    params: Optional[Dict[str, Any]] = None


# =============================================================================
# Generation
# =============================================================================

def _generate(params_in: TreeParamsIn):
    params = params_in.to_params()
    rng = np.random.default_rng(params_in.seed)
    return params, generate_tree(params, rng)


def generate_and_analyze(params_in: TreeParamsIn, slice_height: Optional[float] = None) -> TreeResult:
    """Generate the tree and optionally measure it at one height."""
    try:
        params, (branches, total_volume, trunk_area) = _generate(params_in)
    except InvalidParameterError as e:
        return TreeResult(success=False, error=str(e))
    except Exception as e:
        logger.exception("Generation failed")
        return TreeResult(success=False, error=f"Failed to generate geometry: {str(e)}")

    slice_data = None
    if slice_height is not None:
        stats = analyze_slice(branches, trunk_area, slice_height)
        slice_data = SliceData(**stats.to_dict())

    return TreeResult(
        success=True,
        branches=[
            BranchData(
                start=list(b.start),
                end=list(b.end),
                radius=b.radius,
                depth=b.depth,
                volume=b.volume,
                is_main_path=b.is_main_path,
            )
            for b in branches
        ],
        total_volume=total_volume,
        trunk_area=trunk_area,
        summary=tree_summary(branches, total_volume, trunk_area),
        slice=slice_data,
        params=params_in.model_dump(mode='json'),
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "Leonardo's Rule API"}


@app.get("/api/species")
async def list_species():
    """Species presets and descriptions."""
    return {
        species.value: {
            "params": preset.to_dict(),
            "info": SPECIES_INFO[species],
            "conic": is_conic(species),
        }
        for species, preset in SPECIES_DEFAULTS.items()
    }


@app.post("/api/generate", response_model=TreeResult)
async def generate(params: TreeParamsIn):
    """Generate a tree."""
    return generate_and_analyze(params)


@app.post("/api/slice", response_model=TreeResult)
async def slice_tree(request: SliceRequest):
    """Generate a tree and measure it at one height."""
    return generate_and_analyze(request.params, request.slice_height)


@app.post("/api/profile")
async def profile(request: ProfileRequest):
    """Conservation ratio at evenly spaced heights from base to top."""
    try:
        _, (branches, _, trunk_area) = _generate(request.params)
    except InvalidParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))

    df = slice_profile(branches, trunk_area, profile_heights(branches, request.n_heights))
    return {"rows": df.to_dict(orient='records')}


@app.post("/api/insight")
def insight(params: TreeParamsIn):
    """
    Narrative commentary (always returns text, falling back on failure).

    Declared sync so the blocking Gemini call runs in the threadpool,
    off the event loop that serves geometry requests.
    """
    return {"text": get_tree_insights(params.to_params())}


@app.post("/api/export/csv")
async def export_csv(params: TreeParamsIn):
    """Export branches as CSV."""
    try:
        _, (branches, _, _) = _generate(params)
    except InvalidParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StreamingResponse(
        iter([ExportService.generate_branches_csv(branches)]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=leonardo_branches.csv"}
    )


@app.post("/api/export/json")
async def export_json(params: TreeParamsIn):
    """Export model as JSON."""
    try:
        tree_params, (branches, total_volume, trunk_area) = _generate(params)
    except InvalidParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))

    content = ExportService.generate_model_json(
        branches,
        tree_params.to_dict(),
        tree_summary(branches, total_volume, trunk_area),
    )
    return StreamingResponse(
        iter([content]),
        media_type="application/json",
        headers={"Content-Disposition": "attachment; filename=leonardo_tree.json"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
