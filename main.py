import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd
from tqdm import tqdm

from gjk.config import load_config
from gjk.geometry import DegenerateGeometryError


def main():
    parser = argparse.ArgumentParser(description="Evaluate point-segment and point-triangle distance queries")
    parser.add_argument("input", help="YAML config file")
    parser.add_argument(
        "--verify", "-v",
        action="store_true",
        help="Cross-check results against a numerical reference"
    )
    parser.add_argument(
        "--render", "-r",
        action="store_true",
        help="Render each query to output/<input>_<query>.png"
    )
    parser.add_argument(
        "--progress", "-p",
        action="store_true",
        help="Show progress bar"
    )
    args = parser.parse_args()

    input_path = Path(args.input)
    name = input_path.stem

    try:
        config = load_config(input_path)
        geometry = config.tolerance.bind()
    except FileNotFoundError:
        print(f"Error: YAML file '{args.input}' not found", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading YAML config: {e}", file=sys.stderr)
        sys.exit(1)

    queries = config.queries
    rows = []
    results = []
    for query in tqdm(queries, desc="Querying", disable=not args.progress):
        try:
            result = query.run(geometry)
        except DegenerateGeometryError as e:
            print(f"Error in query '{query.name}': {e}", file=sys.stderr)
            sys.exit(1)
        results.append(result)
        rows.append({
            "name": query.name,
            "kind": query.kind,
            "dist2": float(result.dist2),
            "dist": float(np.sqrt(result.dist2)),
            "witness": tuple(round(float(c), 6) for c in result.witness),
        })

    df = pd.DataFrame(rows, columns=["name", "kind", "dist2", "dist", "witness"])
    print(df.to_string(index=False))

    if args.render:
        from gjk.render.matplot import render

        output_dir = Path("output")
        output_dir.mkdir(parents=True, exist_ok=True)
        for query, result in zip(queries, results, strict=True):
            output_path = output_dir / f"{name}_{query.name}.png"
            render(query, result, str(output_path))
        print(f"Rendered {len(queries)} queries to {output_dir}/")

    if args.verify:
        from gjk.diagnostics import check_queries, generate_diagnostic_report

        print(generate_diagnostic_report(check_queries(geometry, queries)))


if __name__ == "__main__":
    main()
