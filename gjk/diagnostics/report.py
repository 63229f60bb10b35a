import numpy as np
import pandas as pd
from scipy.optimize import minimize

from gjk.config import SegmentQuery, TriangleQuery
from gjk.geometry import Geometry


def reference_dist2(point, vertices) -> tuple[float, np.ndarray]:
    """Numerically minimize the squared distance from a point to a simplex.

    The closest point is written as sum(lam_i * v_i) with lam_i >= 0 and
    sum(lam_i) == 1, and |x - P|^2 is minimized with SLSQP.

    Args:
        point: Query point [x, y, z]
        vertices: 2 (segment) or 3 (triangle) vertices

    Returns:
        (squared distance, closest point)
    """
    P = np.asarray(point, dtype=np.float64)
    V = np.asarray(vertices, dtype=np.float64)
    n = len(V)

    def objective(lam: np.ndarray) -> float:
        d = lam @ V - P
        return float(d @ d)

    def gradient(lam: np.ndarray) -> np.ndarray:
        return 2.0 * V @ (lam @ V - P)

    res = minimize(
        objective,
        x0=np.full(n, 1.0 / n),
        jac=gradient,
        method="SLSQP",
        bounds=[(0.0, 1.0)] * n,
        constraints=[{"type": "eq", "fun": lambda lam: np.sum(lam) - 1.0}],
        options={"ftol": 1e-14, "maxiter": 500},
    )
    closest = res.x @ V
    return float(np.dot(closest - P, closest - P)), closest


def check_queries(
    geometry: Geometry,
    queries: list[SegmentQuery | TriangleQuery],
) -> pd.DataFrame:
    """Evaluate each query in closed form and against the numerical reference."""
    rows = []
    for query in queries:
        result = query.run(geometry)
        ref_dist2, ref_closest = reference_dist2(query.point, query.vertices)
        rows.append({
            "name": query.name,
            "kind": query.kind,
            "dist2": float(result.dist2),
            "reference": ref_dist2,
            "abs_error": abs(float(result.dist2) - ref_dist2),
            "witness_gap": float(np.linalg.norm(result.witness - ref_closest)),
        })
    return pd.DataFrame(
        rows,
        columns=["name", "kind", "dist2", "reference", "abs_error", "witness_gap"],
    )


def generate_diagnostic_report(df: pd.DataFrame, tol: float = 1e-6) -> str:
    """Format a verification report from check_queries() output.

    Args:
        df: Frame returned by check_queries()
        tol: Largest accepted absolute error in the squared distance

    Returns:
        Formatted report string
    """
    lines = []

    lines.append("=" * 60)
    lines.append("PROXIMITY VERIFICATION REPORT")
    lines.append("=" * 60)
    lines.append("")

    if df.empty:
        lines.append("  (no queries)")
        lines.append("")
        lines.append("=" * 60)
        return "\n".join(lines)

    lines.append("## Results")
    lines.append("")
    lines.append(f"  {'Query':20s} {'Kind':8s} {'dist2':>12s}  {'reference':>12s}  {'error':>10s}")

    failed = []
    for row in df.itertuples(index=False):
        ok = row.abs_error <= tol
        mark = "✓" if ok else "✗"
        lines.append(
            f"  {row.name:20s} {row.kind:8s} {row.dist2:12.6f}  {row.reference:12.6f}"
            f"  {row.abs_error:10.2e} {mark}"
        )
        if not ok:
            failed.append(row.name)

    lines.append("")
    lines.append("## Summary")
    lines.append("")
    lines.append(f"Queries: {len(df)}")
    lines.append(f"Max abs error: {df['abs_error'].max():.3e}")
    lines.append(f"Max witness gap: {df['witness_gap'].max():.3e}")

    if failed:
        lines.append(f"⚠️  {len(failed)} queries exceed tolerance {tol:g}: {', '.join(failed)}")
    else:
        lines.append(f"✓ All queries agree with the reference within {tol:g}")

    lines.append("")
    lines.append("=" * 60)

    return "\n".join(lines)
