"""
Planar surface-code lattice (X errors only, open boundaries).

We use an W x H grid of faces (plaquettes) with:
  - W*(H+1) horizontal edges and (W+1)*H vertical edges (data qubits)
  - Z checks on faces (detect X errors on their four boundary edges)

Edges beyond the grid do not exist: reads return 0 and toggles are ignored,
which is what lets a correction path leave the lattice through a boundary.
"""

from __future__ import annotations

from typing import Iterator, List, NamedTuple

import numpy as np
from scipy.sparse import csr_matrix

HORIZONTAL = "h"
VERTICAL = "v"


class Face(NamedTuple):
    """Face (plaquette) at column fx, row fy."""

    fx: int
    fy: int


class Edge(NamedTuple):
    """
    Lattice edge.

    kind "h": between vertices (x, y) and (x+1, y)
    kind "v": between vertices (x, y) and (x, y+1)
    """

    kind: str
    x: int
    y: int

    @classmethod
    def horizontal(cls, x: int, y: int) -> "Edge":
        return cls(HORIZONTAL, x, y)

    @classmethod
    def vertical(cls, x: int, y: int) -> "Edge":
        return cls(VERTICAL, x, y)


def _check_dims(width: int, height: int) -> None:
    if width < 3 or height < 3:
        raise ValueError(f"lattice needs width, height >= 3 (got {width}x{height})")


def _h_idx(width: int, x: int, y: int) -> int:
    """Horizontal edge index at (x,y)."""
    return y * width + x


def _v_idx(width: int, x: int, y: int) -> int:
    """Vertical edge index at (x,y), relative to the vertical block."""
    return y * (width + 1) + x


def planar_code_matrix(width: int, height: int) -> csr_matrix:
    """
    Return the face check matrix Hz of a planar lattice.

    Rows are faces in row-major order, columns are the horizontal edges
    followed by the vertical edges (the layout of
    ``PlanarLattice.error_vector``), so ``Hz @ e % 2`` is the syndrome.
    """
    _check_dims(width, height)

    n_h = width * (height + 1)
    n = n_h + (width + 1) * height
    m = width * height

    rows, cols, data = [], [], []
    for fy in range(height):
        for fx in range(width):
            r = fy * width + fx
            boundary = [
                _h_idx(width, fx, fy),
                _h_idx(width, fx, fy + 1),
                n_h + _v_idx(width, fx, fy),
                n_h + _v_idx(width, fx + 1, fy),
            ]
            for c in boundary:
                rows.append(r)
                cols.append(c)
                data.append(1)
    return csr_matrix((data, (rows, cols)), shape=(m, n), dtype=np.uint8)


class PlanarLattice:
    """
    Planar lattice holding one X-error bit per edge.

    Each face (fx, fy) has boundary edges:
      top:    h(fx, fy)
      bottom: h(fx, fy+1)
      left:   v(fx, fy)
      right:  v(fx+1, fy)

    Defects are never stored; they are recomputed from the edge bits.

    Parameters
    ----------
    width : int
        Number of faces along x (>= 3)
    height : int
        Number of faces along y (>= 3)

    Examples
    --------
    >>> lat = PlanarLattice(5, 5)
    >>> lat.toggle_edge(Edge.vertical(3, 2))
    >>> lat.list_defects()
    [Face(fx=2, fy=2), Face(fx=3, fy=2)]
    """

    def __init__(self, width: int, height: int):
        _check_dims(width, height)
        self.width = width
        self.height = height
        self._h = np.zeros(width * (height + 1), dtype=np.uint8)
        self._v = np.zeros((width + 1) * height, dtype=np.uint8)

    def __repr__(self) -> str:
        return f"PlanarLattice(width={self.width}, height={self.height})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlanarLattice):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self._h, other._h)
            and np.array_equal(self._v, other._v)
        )

    @property
    def num_edges(self) -> int:
        return self._h.size + self._v.size

    @property
    def num_faces(self) -> int:
        return self.width * self.height

    def reset(self):
        """Clear every edge in place."""
        self._h.fill(0)
        self._v.fill(0)

    def copy(self) -> "PlanarLattice":
        other = PlanarLattice(self.width, self.height)
        other._h[:] = self._h
        other._v[:] = self._v
        return other

    # -- bounds / indexing -------------------------------------------------

    def in_bounds(self, face: Face) -> bool:
        return 0 <= face[0] < self.width and 0 <= face[1] < self.height

    def _locate(self, edge: Edge):
        """Return (buffer, index) for an edge, or None if it does not exist."""
        kind, x, y = edge
        if kind == HORIZONTAL:
            if 0 <= x < self.width and 0 <= y <= self.height:
                return self._h, _h_idx(self.width, x, y)
            return None
        if kind == VERTICAL:
            if 0 <= x <= self.width and 0 <= y < self.height:
                return self._v, _v_idx(self.width, x, y)
            return None
        raise ValueError(f"unknown edge kind {kind!r}")

    # -- edges ---------------------------------------------------------------

    def toggle_edge(self, edge: Edge):
        """Flip the error bit on an edge. Edges off the lattice are ignored."""
        loc = self._locate(edge)
        if loc is None:
            return
        buf, i = loc
        buf[i] ^= 1

    def get_edge(self, edge: Edge) -> int:
        """Error bit on an edge; 0 for edges off the lattice."""
        loc = self._locate(edge)
        if loc is None:
            return 0
        buf, i = loc
        return int(buf[i])

    def edges(self) -> Iterator[Edge]:
        """All edges: horizontal rows first, then vertical rows."""
        for y in range(self.height + 1):
            for x in range(self.width):
                yield Edge(HORIZONTAL, x, y)
        for y in range(self.height):
            for x in range(self.width + 1):
                yield Edge(VERTICAL, x, y)

    def adjacent_faces(self, edge: Edge) -> List[Face]:
        """Faces of the lattice bordering an edge (0, 1 or 2 of them)."""
        if self._locate(edge) is None:
            return []
        kind, x, y = edge
        if kind == HORIZONTAL:
            candidates = [Face(x, y - 1), Face(x, y)]
        else:
            candidates = [Face(x - 1, y), Face(x, y)]
        return [f for f in candidates if self.in_bounds(f)]

    def is_interior(self, edge: Edge) -> bool:
        return len(self.adjacent_faces(edge)) == 2

    # -- syndromes -----------------------------------------------------------

    def face_syndrome(self, face: Face) -> int:
        """Face syndrome = parity of the 4 boundary edges of the face."""
        if not self.in_bounds(face):
            return 0
        fx, fy = face
        top = self.get_edge(Edge(HORIZONTAL, fx, fy))
        bottom = self.get_edge(Edge(HORIZONTAL, fx, fy + 1))
        left = self.get_edge(Edge(VERTICAL, fx, fy))
        right = self.get_edge(Edge(VERTICAL, fx + 1, fy))
        return top ^ bottom ^ left ^ right

    def list_defects(self) -> List[Face]:
        """All faces with syndrome 1, row-major (fy outer, fx inner)."""
        out = []
        for fy in range(self.height):
            for fx in range(self.width):
                if self.face_syndrome(Face(fx, fy)) == 1:
                    out.append(Face(fx, fy))
        return out

    def defect_count(self) -> int:
        return int(self.syndrome_vector().sum())

    def error_vector(self) -> np.ndarray:
        """Edge bits as one uint8 vector: horizontal block, then vertical."""
        return np.concatenate([self._h, self._v])

    def syndrome_vector(self) -> np.ndarray:
        """Face syndromes as a uint8 vector in row-major face order."""
        W, H = self.width, self.height
        h = self._h.reshape(H + 1, W)
        v = self._v.reshape(H, W + 1)
        s = h[:-1, :] ^ h[1:, :] ^ v[:, :-1] ^ v[:, 1:]
        return s.reshape(-1)

    # -- corrections ---------------------------------------------------------

    def apply_dual_step(self, from_face: Face, to_face: Face):
        """
        Apply a correction step on the dual lattice between two faces.

        The faces must be Manhattan neighbours. A step with an endpoint off
        the lattice is ignored (no wrap-around).
        """
        dx = to_face[0] - from_face[0]
        dy = to_face[1] - from_face[1]
        if abs(dx) + abs(dy) != 1:
            raise ValueError(
                f"apply_dual_step: {tuple(from_face)} -> {tuple(to_face)} "
                "is not a Manhattan neighbour step"
            )

        if not self.in_bounds(from_face) or not self.in_bounds(to_face):
            return

        fx, fy = from_face
        if dx == 1:
            self.toggle_edge(Edge(VERTICAL, fx + 1, fy))
        elif dx == -1:
            self.toggle_edge(Edge(VERTICAL, fx, fy))
        elif dy == 1:
            self.toggle_edge(Edge(HORIZONTAL, fx, fy + 1))
        else:
            self.toggle_edge(Edge(HORIZONTAL, fx, fy))
