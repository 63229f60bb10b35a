import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from gjk.config import SegmentQuery, TriangleQuery
from gjk.geometry import WitnessedDistance


def render(
    query: SegmentQuery | TriangleQuery,
    result: WitnessedDistance,
    output_path: str,
    dpi: int = 72,
) -> None:
    """
    Render a proximity query to a PNG image using matplotlib.

    Args:
        query: Segment or triangle query that produced the result
        result: Result carrying the witness point
        output_path: Path where the PNG file will be saved
        dpi: Dots per inch for the output image (default: 72)

    Draws the primitive, the query point, the witness and the segment
    joining them, which has length sqrt(result.dist2).
    """
    vertices = np.asarray(query.vertices, dtype=np.float64)
    point = np.asarray(query.point, dtype=np.float64)
    witness = np.asarray(result.witness, dtype=np.float64)

    fig = plt.figure(figsize=(6, 6), dpi=dpi)
    ax = fig.add_subplot(projection="3d")

    if len(vertices) == 3:
        tri = Poly3DCollection([vertices], alpha=0.3, facecolor="lightblue", edgecolor="blue")
        ax.add_collection3d(tri)
    else:
        ax.plot(*vertices.T, color="blue", linewidth=2)
    ax.scatter(*vertices.T, color="blue", s=20)

    ax.scatter(*point, color="red", s=30, label="point")
    ax.scatter(*witness, color="green", s=30, label="witness")
    ax.plot(*np.stack([point, witness]).T, color="gray", linestyle="--", linewidth=1)

    # Equal-ish aspect: fit all drawn points into a cube
    pts = np.vstack([vertices, point, witness])
    center = (pts.max(axis=0) + pts.min(axis=0)) / 2
    half = max(float(np.max(pts.max(axis=0) - pts.min(axis=0))) / 2, 1e-9)
    ax.set_xlim(center[0] - half, center[0] + half)
    ax.set_ylim(center[1] - half, center[1] + half)
    ax.set_zlim(center[2] - half, center[2] + half)

    ax.set_title(f"{query.name}: dist = {np.sqrt(float(result.dist2)):.4g}", fontsize=10)
    ax.legend(loc="upper right", fontsize=8)

    fig.savefig(output_path, dpi=dpi)
    plt.close(fig)
