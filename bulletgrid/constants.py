"""Board encoding and planner tuning constants.

Centralizes the bit layout of a board cell and the default planning
parameters so the simulator, graph builder and tools agree on them.
"""

# Cell bit flags
CELL_EMPTY = 0
CELL_PLAYER = 1 << 0
CELL_PROJECTILE_UP = 1 << 1
CELL_PROJECTILE_LEFT = 1 << 2
CELL_PROJECTILE_DOWN = 1 << 3
CELL_PROJECTILE_RIGHT = 1 << 4
CELL_PROJECTILE_ANY = CELL_PROJECTILE_UP | CELL_PROJECTILE_LEFT | CELL_PROJECTILE_DOWN | CELL_PROJECTILE_RIGHT

# Board geometry
MIN_BOARD_SIZE = 5  # smallest board with an inner area plus spawn ring
DEFAULT_BOARD_SIZE = 7

# Planning defaults
DEFAULT_SPAWN_COUNT = 1
DEFAULT_STRATEGY = "choose"  # "choose" (exhaustive) or "iterate" (randomized incremental)
DEFAULT_POLICY = "random"
DEFAULT_WORKERS = 1  # >1 fans exhaustive search rounds out over a process pool

# Graph edge packing (one byte per node)
EDGE_NEXT_SHIFT = 0  # low nibble: directions of outgoing moves
EDGE_PREV_SHIFT = 4  # high nibble: directions of arriving moves
EDGE_NIBBLE = 0x0F

# Rendering
RENDER_CELL_PX = 32
RENDER_BG_COLOR = (18, 18, 24)
RENDER_GRID_COLOR = (60, 60, 72)
RENDER_RING_COLOR = (40, 28, 28)
RENDER_PLAYER_COLOR = (80, 200, 120)
RENDER_PROJECTILE_COLOR = (230, 80, 70)
RENDER_TRAJECTORY_COLOR = (240, 190, 60)

__all__ = [name for name in globals().keys() if name.isupper()]
