# geometry.py
"""
Point helpers used by the perspective correction.
"""
import numpy as np


def reorder_corners(points):
    """
    Orders four corner points as top-left, top-right, bottom-right, bottom-left.

    The top-left corner has the smallest x + y and the bottom-right the largest;
    top-right and bottom-left are split by y - x. Heavily rotated quads can come
    out self-intersecting, which is not corrected here.

    Anything other than exactly four points is returned as-is.
    """
    pts = np.asarray(points, dtype=np.float32).reshape(-1, 2)
    if len(pts) != 4:
        return points

    sums = pts.sum(axis=1)
    diffs = pts[:, 1] - pts[:, 0]

    ordered = np.zeros((4, 2), dtype=np.float32)
    ordered[0] = pts[np.argmin(sums)]   # top-left
    ordered[1] = pts[np.argmin(diffs)]  # top-right
    ordered[2] = pts[np.argmax(sums)]   # bottom-right
    ordered[3] = pts[np.argmax(diffs)]  # bottom-left
    return ordered
