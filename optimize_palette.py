#!/usr/bin/env python3
"""
optimize_palette.py
Search for UI palettes around a primary colour, or order a colour set into even steps.

Usage:
  python optimize_palette.py palette PRIMARY --algo [hill|anneal|genetic] --seed S --iterations N --swatch OUT.png --debug
  python optimize_palette.py path COLOUR COLOUR [COLOUR ...] --iterations N --seed S
  python optimize_palette.py evolve TARGET --population N --generations N --seed S
  python optimize_palette.py distinct N --background COLOUR --provided C [C ...] --fixed K --sweeps N

Commands:
  palette : Optimise a 5-colour palette [accent, background, surface, button_text, main_text].
  path    : Reorder colours so consecutive CIEDE2000 steps are as even as possible.
  evolve  : Evolve a random colour population towards one target colour.
  distinct: Anneal N colours that stay apart under simulated colour vision deficiencies.

Input:
  Colours as '#rgb', '#rrggbb', 'rgb(r, g, b)' or CSS names.

Output:
  Hex codes with role names and the fitness. --swatch writes a PNG strip (Pillow).

Notes:
  Palette fitness is maximised; path fitness and distinct cost are minimised.
  A fixed --seed makes every command reproducible.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from palette_opt.colour_names import name_of_hex, parse_colour
from palette_opt.config import (
    AnnealingConfig,
    DistinctColoursConfig,
    GeneticConfig,
    HillClimbingConfig,
)
from palette_opt.core_types import Colour, CrossoverOperation, Palette, ensure_palette
from palette_opt.fitness import fitness_terms
from palette_opt.genetic import evolve_single_colour, genetic_crossover_optimization
from palette_opt.local import (
    hill_climbing_optimization,
    optimize_distinct_colours,
    simulated_annealing_optimization,
)
from palette_opt.path import find_optimal_colour_path
from palette_opt.random_palettes import random_palette, random_population
from palette_opt.utils import (
    # formatting
    format_palette_roles,
    format_seconds_compact,
    key_value_pairs_to_string,
    # random source
    make_rng,
    # output
    save_palette_swatch,
    # pretty logging
    print_banner,
    print_config_line,
    log,
    debug_log,
    error,
    enable_line_buffered_stdout,
)

# CLI args & small helpers


def _default_workers() -> int:
    """Half the cores for offspring scoring, at least one."""
    return max(1, (os.cpu_count() or 2) // 2)


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        command: "palette" | "path" | "evolve" | "distinct"
        palette: primary, algo, start, population, iterations, crossover, workers, swatch
        path: colours, iterations
        evolve: target, population, generations
        distinct: n, background, provided, fixed, sweeps, swatch
        seed: optional int
        debug: bool for progress lines
    """
    parser = argparse.ArgumentParser(
        prog="palette-opt",
        description="Optimise UI palettes and colour sequences with tidy, readable output.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", type=int, default=None, help="Random seed")
    common.add_argument("--debug", action="store_true", help="Verbose progress")

    p_pal = sub.add_parser("palette", parents=[common], help="Optimise a 5-colour palette")
    p_pal.add_argument("primary", help="Primary reference colour")
    p_pal.add_argument(
        "--algo",
        choices=["hill", "anneal", "genetic"],
        default="anneal",
        help="Search strategy.",
    )
    p_pal.add_argument(
        "--start",
        nargs=5,
        metavar="COLOUR",
        default=None,
        help="Starting palette for hill/anneal. Omit for a random start.",
    )
    p_pal.add_argument(
        "--population", type=int, default=20, help="Genetic population size"
    )
    p_pal.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Iteration/generation cap. Omit for the strategy default.",
    )
    p_pal.add_argument(
        "--crossover",
        choices=[op.value for op in CrossoverOperation],
        default=CrossoverOperation.UNIFORM.value,
        help="Genetic crossover operator.",
    )
    p_pal.add_argument(
        "--workers", type=int, default=1, help="Threads for genetic offspring scoring (0 = auto)"
    )
    p_pal.add_argument(
        "--swatch", type=Path, default=None, help="Write a PNG swatch of the result"
    )

    p_path = sub.add_parser("path", parents=[common], help="Order colours into even steps")
    p_path.add_argument("colours", nargs="+", help="Colours to order (2 or more)")
    p_path.add_argument("--iterations", type=int, default=10000, help="Swap attempts")
    p_path.add_argument(
        "--swatch", type=Path, default=None, help="Write a PNG swatch of the path"
    )

    p_evo = sub.add_parser("evolve", parents=[common], help="Evolve towards a colour")
    p_evo.add_argument("target", help="Target colour")
    p_evo.add_argument("--population", type=int, default=50, help="Population size")
    p_evo.add_argument("--generations", type=int, default=500, help="Generation cap")

    p_dst = sub.add_parser(
        "distinct", parents=[common], help="Anneal a set of mutually distinct colours"
    )
    p_dst.add_argument("n", type=int, nargs="?", default=5, help="Set size (2 or more)")
    p_dst.add_argument("--background", default="#ffffff", help="Background for contrast")
    p_dst.add_argument(
        "--provided", nargs="+", default=[], metavar="COLOUR", help="Starting colours"
    )
    p_dst.add_argument(
        "--fixed", type=int, default=0, help="Leading provided colours kept unchanged"
    )
    p_dst.add_argument(
        "--sweeps", type=int, default=None, help="Cooling step cap. Omit to run to Tmin."
    )
    p_dst.add_argument(
        "--swatch", type=Path, default=None, help="Write a PNG swatch of the set"
    )

    args = parser.parse_args(argv)
    if getattr(args, "workers", 1) == 0:
        args.workers = _default_workers()
    return args


def _report_palette(primary: Colour, palette: Palette, score: float, debug: bool) -> None:
    log(f"primary={primary.hex}")
    log(format_palette_roles(palette))
    log(f"fitness={score:.3f}")
    if debug:
        terms = fitness_terms(primary, palette)
        if terms is not None:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Text", terms.text_contrast),
                        ("UI", terms.ui_contrast),
                        ("Harmony", terms.harmony),
                        ("Background", terms.background),
                        ("Separation", terms.separation),
                        ("Min dE", terms.min_delta_e),
                    ]
                )
            )


def _run_palette(args: argparse.Namespace) -> int:
    primary = parse_colour(args.primary)
    rng = make_rng(args.seed)
    print_config_line(
        "palette",
        [("Primary", primary.hex), ("Algo", args.algo), ("Seed", args.seed if args.seed is not None else "-")],
        debug=False,
    )

    limits = {} if args.iterations is None else {"max_iterations": args.iterations}
    t0 = time.perf_counter()
    if args.algo == "genetic":
        cfg = GeneticConfig(
            crossover_operation=args.crossover,
            workers=args.workers,
            debug=args.debug,
            **limits,
        )
        result = genetic_crossover_optimization(
            primary, random_population(args.population, rng), rng=rng, config=cfg
        )
        best, score, iterations = result.best_palette, result.best_fitness, result.iterations
    else:
        start = (
            ensure_palette([parse_colour(c) for c in args.start], what="--start")
            if args.start
            else random_palette(rng)
        )
        if args.algo == "hill":
            hc = HillClimbingConfig(debug=args.debug, **limits)
            local = hill_climbing_optimization(primary, start, config=hc)
        else:
            sa = AnnealingConfig(debug=args.debug, **limits)
            local = simulated_annealing_optimization(primary, start, rng=rng, config=sa)
        best, score, iterations = local.best_solution, local.best_fitness, local.iterations

    print_banner(f"{args.algo} result")
    _report_palette(primary, best, score, args.debug)
    log(
        f"iterations={iterations} in {format_seconds_compact(time.perf_counter() - t0)}"
    )
    if args.swatch is not None:
        save_palette_swatch(args.swatch, [(primary,) + tuple(best)])
        log(f"swatch -> {args.swatch}")
    return 0


def _run_path(args: argparse.Namespace) -> int:
    result = find_optimal_colour_path(
        args.colours, iterations=args.iterations, seed=args.seed, debug=args.debug
    )
    print_banner("path result")
    names: List[str] = []
    for key in result.path:
        colour = parse_colour(key)
        label = name_of_hex(colour.hex)
        names.append(f"{key} ({label})" if label and label != key.lower() else key)
    log(" -> ".join(names))
    log(f"fitness={result.fitness:.4f}")
    if args.swatch is not None:
        save_palette_swatch(args.swatch, [[parse_colour(k) for k in result.path]])
        log(f"swatch -> {args.swatch}")
    return 0


def _run_evolve(args: argparse.Namespace) -> int:
    target = parse_colour(args.target)
    best = evolve_single_colour(
        target,
        population_size=args.population,
        generations=args.generations,
        seed=args.seed,
        debug=args.debug,
    )
    print_banner("evolve result")
    log(f"target={target.hex} best={best.hex}")
    return 0


def _run_distinct(args: argparse.Namespace) -> int:
    cfg = DistinctColoursConfig(
        provided_colours=tuple(args.provided),
        fixed_colours=args.fixed,
        background=args.background,
        max_sweeps=args.sweeps,
        debug=args.debug,
    )
    t0 = time.perf_counter()
    result = optimize_distinct_colours(args.n, cfg, seed=args.seed)
    print_banner("distinct result")
    log(" ".join(c.hex for c in result.colours))
    log(
        f"cost={result.cost:.3f} start={result.start_cost:.3f} "
        f"sweeps={result.iterations} in {format_seconds_compact(time.perf_counter() - t0)}"
    )
    if args.swatch is not None:
        save_palette_swatch(args.swatch, [list(result.colours)])
        log(f"swatch -> {args.swatch}")
    return 0


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point. Exits with status 2 on invalid input."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    handlers = {
        "palette": _run_palette,
        "path": _run_path,
        "evolve": _run_evolve,
        "distinct": _run_distinct,
    }
    try:
        code = handlers[args.command](args)
    except ValueError as exc:
        error(str(exc))
        sys.exit(2)
    sys.exit(code)


if __name__ == "__main__":
    main()
