# app/state - Session state management
from .session import (
    get_params,
    set_params,
    reset_to_species,
    get_slice_height,
    set_slice_height,
    get_mode,
    set_mode,
    get_seed,
    set_seed,
    get_insight_requester,
    clear_all,
)

__all__ = [
    'get_params',
    'set_params',
    'reset_to_species',
    'get_slice_height',
    'set_slice_height',
    'get_mode',
    'set_mode',
    'get_seed',
    'set_seed',
    'get_insight_requester',
    'clear_all',
]
