"""State normalization — clamp offsets and sort room collections by id.

Run before validation so that violation order is stable across edits.
"""

from __future__ import annotations

from planforge.config import wall_length
from planforge.models.document import KitchenState


def normalize_state(state: KitchenState) -> KitchenState:
    """Return a normalized copy of *state*; the input is left untouched."""
    state = state.model_copy(deep=True)
    room = state.room
    size = room.size_mm

    room.openings.sort(key=lambda o: o.id)
    for opening in room.openings:
        length = wall_length(size.width, size.depth, opening.wall_id)
        if length is not None:
            max_offset = max(0, length - opening.width_mm)
            opening.offset_mm = min(max(opening.offset_mm, 0), max_offset)
        if opening.swing is not None and opening.swing.radius_mm < 0:
            opening.swing.radius_mm = 0

    room.utilities.sort(key=lambda u: u.id)
    for util in room.utilities:
        if util.zone_radius_mm < 0:
            util.zone_radius_mm = 0
        if util.wall_id is not None and util.offset_mm is not None:
            length = wall_length(size.width, size.depth, util.wall_id)
            if length is not None:
                util.offset_mm = min(max(util.offset_mm, 0), max(length, 0))

    room.restricted_zones.sort(key=lambda z: z.id)
    return state
