"""Layered reachability graph over (turn, row, col).

Nodes live in a flat arena addressed by ``(turn * size + row) * size + col``.
Each node is a single byte: the low nibble holds the directions of moves
leaving the node (``next``), the high nibble the directions of moves that
arrived at it (``prev``). An edge ``(t, r, c) --d--> (t + 1, r + dr, c + dc)``
sets bit ``d`` in both nibbles, so the two sides always agree and copying a
graph is a single ``bytearray`` copy.

A node whose ``prev`` nibble is empty is unreached (the turn-0 player node is
the only reached node without predecessors). The board is solvable while any
node on the last turn still has a predecessor.
"""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Sequence, Tuple

from .board import Board
from .constants import EDGE_NEXT_SHIFT, EDGE_NIBBLE, EDGE_PREV_SHIFT
from .geometry import DIRECTIONS, Direction, in_inner
from .logger import get_logger

log = get_logger("graph")

Node = Tuple[int, int, int]  # (turn, row, col)


class ReachabilityGraph:
    def __init__(self, size: int, turns: int, start: Tuple[int, int], edges: Optional[bytearray] = None):
        self.size = size
        self.turns = turns
        self.start = start  # (row, col) of the player on turn 0
        self.edges = edges if edges is not None else bytearray(turns * size * size)

    # --- Addressing ----------------------------------------------------------
    def index(self, turn: int, row: int, col: int) -> int:
        return (turn * self.size + row) * self.size + col

    def next_mask(self, turn: int, row: int, col: int) -> int:
        return (self.edges[self.index(turn, row, col)] >> EDGE_NEXT_SHIFT) & EDGE_NIBBLE

    def prev_mask(self, turn: int, row: int, col: int) -> int:
        return (self.edges[self.index(turn, row, col)] >> EDGE_PREV_SHIFT) & EDGE_NIBBLE

    def is_reached(self, turn: int, row: int, col: int) -> bool:
        if turn == 0:
            return (row, col) == self.start
        return self.prev_mask(turn, row, col) != 0

    # --- Edges ---------------------------------------------------------------
    def has_edge(self, turn: int, row: int, col: int, d: Direction) -> bool:
        return bool(self.next_mask(turn, row, col) & (1 << d))

    def add_edge(self, turn: int, row: int, col: int, d: Direction) -> Node:
        """Record the move ``d`` from (turn, row, col); return the head node."""
        drow, dcol = Direction(d).delta
        head = (turn + 1, row + drow, col + dcol)
        self.edges[self.index(turn, row, col)] |= (1 << d) << EDGE_NEXT_SHIFT
        self.edges[self.index(*head)] |= (1 << d) << EDGE_PREV_SHIFT
        return head

    def remove_edge(self, turn: int, row: int, col: int, d: Direction) -> bool:
        if not self.has_edge(turn, row, col, d):
            return False
        drow, dcol = Direction(d).delta
        self.edges[self.index(turn, row, col)] &= ~((1 << d) << EDGE_NEXT_SHIFT) & 0xFF
        self.edges[self.index(turn + 1, row + drow, col + dcol)] &= ~((1 << d) << EDGE_PREV_SHIFT) & 0xFF
        return True

    def successors(self, turn: int, row: int, col: int) -> List[Tuple[Direction, Node]]:
        mask = self.next_mask(turn, row, col)
        out = []
        for d in DIRECTIONS:
            if mask & (1 << d):
                drow, dcol = d.delta
                out.append((d, (turn + 1, row + drow, col + dcol)))
        return out

    def predecessors(self, turn: int, row: int, col: int) -> List[Tuple[Direction, Node]]:
        mask = self.prev_mask(turn, row, col)
        out = []
        for d in DIRECTIONS:
            if mask & (1 << d):
                drow, dcol = d.delta
                out.append((d, (turn - 1, row - drow, col - dcol)))
        return out

    def cut_incoming(self, turn: int, row: int, col: int) -> bool:
        """Drop every edge arriving at the node. Returns False if there were none."""
        preds = self.predecessors(turn, row, col)
        for d, (pt, pr, pc) in preds:
            self.remove_edge(pt, pr, pc, d)
        return bool(preds)

    def cut_outgoing(self, turn: int, row: int, col: int) -> List[Node]:
        """Drop every edge leaving the node; return successors left unreached."""
        orphaned = []
        for d, head in self.successors(turn, row, col):
            self.remove_edge(turn, row, col, d)
            if self.prev_mask(*head) == 0:
                orphaned.append(head)
        return orphaned

    # --- Queries -------------------------------------------------------------
    def is_solvable(self) -> bool:
        last = self.turns - 1
        lo = self.index(last, 0, 0)
        shift = EDGE_PREV_SHIFT
        return any((b >> shift) & EDGE_NIBBLE for b in self.edges[lo:])

    def reached_count(self, turn: Optional[int] = None) -> int:
        """Number of reached nodes, on one turn or across all turns."""
        turns = range(self.turns) if turn is None else (turn,)
        n = self.size
        total = 0
        for t in turns:
            if t == 0:
                total += 1
                continue
            lo = self.index(t, 0, 0)
            total += sum(1 for b in self.edges[lo : lo + n * n] if (b >> EDGE_PREV_SHIFT) & EDGE_NIBBLE)
        return total

    def copy(self) -> "ReachabilityGraph":
        return ReachabilityGraph(self.size, self.turns, self.start, bytearray(self.edges))

    def __eq__(self, other):
        if not isinstance(other, ReachabilityGraph):
            return NotImplemented
        return (self.size, self.turns, self.start, self.edges) == (other.size, other.turns, other.start, other.edges)

    def __repr__(self):  # pragma: no cover - debugging aid
        return f"ReachabilityGraph(size={self.size}, turns={self.turns}, reached={self.reached_count()})"


def _is_swap(board: Board, row: int, col: int, d: Direction) -> bool:
    """True if a projectile at (row, col) is heading straight at a player moving ``d``."""
    return bool(board.cell(row, col) & d.opposite.projectile_bit)


def build_graph(boards: Sequence[Board], player_cell: Optional[Tuple[int, int]] = None) -> ReachabilityGraph:
    """Breadth-first expansion of legal player moves over the simulated boards.

    ``boards[t]`` is the board on turn ``t``; the graph spans ``len(boards)``
    turns. The player may never step into the spawn ring, into a cell holding
    a projectile on the next turn, or swap cells with a projectile.
    """
    first = boards[0]
    size = first.size
    turns = len(boards)
    start = player_cell if player_cell is not None else first.player_cell()
    log.debug(f"Player found at (col={start[1]}, row={start[0]})")

    graph = ReachabilityGraph(size, turns, start)
    queue = deque([(0, start[0], start[1])])
    while queue:
        turn, row, col = queue.popleft()
        if turn == turns - 1:
            continue
        nxt_board = boards[turn + 1]
        cur_board = boards[turn]
        for d in DIRECTIONS:
            drow, dcol = d.delta
            r, c = row + drow, col + dcol
            if not in_inner(r, c, size):
                continue
            if nxt_board.has_projectile(r, c):
                continue
            if _is_swap(cur_board, r, c, d):
                continue
            first_visit = graph.prev_mask(turn + 1, r, c) == 0
            graph.add_edge(turn, row, col, d)
            if first_visit:
                queue.append((turn + 1, r, c))
    return graph


__all__ = ["ReachabilityGraph", "build_graph", "Node"]
