"""
Procedural Studio - Main Entry Point

Evaluates the demo graph and prints what every node produced.
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for Procedural Studio.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    from procedural_studio.config import configure_logging, load_settings
    from procedural_studio.core.demo import build_demo_graph
    from procedural_studio.core.evaluator import evaluate_graph

    settings = load_settings()

    parser = argparse.ArgumentParser(
        prog="procedural_studio",
        description="Evaluate the demo node graph",
    )
    parser.add_argument("--size", type=int, default=settings.default_size,
                        help="generator image size in pixels")
    parser.add_argument("--seed", type=int, default=settings.demo_seed,
                        help="seed of the noise node")
    parser.add_argument("--log-level", default=settings.log_level,
                        help="logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    graph = build_demo_graph(size=args.size, seed=args.seed)
    report = evaluate_graph(graph)

    for node_id, node in graph.nodes.items():
        buffer = report.outputs.get(node_id)
        if buffer is None:
            error = report.errors.get(node_id)
            status = f"no output ({error.message})" if error else "no output"
        else:
            status = f"{buffer.width}x{buffer.height}"
        print(f"{node_id:>4}  {node.title:<16} {status}")

    print(f"evaluated in {report.duration * 1000:.1f} ms")
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
