"""
Command-line entry point.

Usage:
    python -m rndnet run --variant dense --seed 0
    python -m rndnet sweep --variant dense --start 0 --count 64
    python -m rndnet lfsr --width 16
"""

import argparse
import sys
import time

from .core.stream import find_maximal_mask, period
from .core.variants import Variant
from .datasets.iris import load_iris
from .evolution.engine import EvolutionConfig, EvolutionEngine, print_progress
from .evolution.sweep import run_sweep


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='rndnet',
        description='Evolve classifiers whose weights are regenerated from an LFSR stream'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    def add_model_args(sub):
        sub.add_argument(
            '--variant', choices=Variant.names(), default=Variant.DENSE.value,
            help='Network variant (default: dense)'
        )
        sub.add_argument(
            '--generations', type=int, default=128,
            help='Number of generations (default: 128)'
        )
        sub.add_argument(
            '--population', type=int, default=256,
            help='Population size (default: 256)'
        )

    run = subparsers.add_parser('run', help='Evolve a single seed')
    add_model_args(run)
    run.add_argument('--seed', type=int, default=0, help='Run seed (default: 0)')
    run.add_argument('--quiet', action='store_true', help='Only print the final line')

    sweep = subparsers.add_parser('sweep', help='Evolve many seeds in parallel')
    add_model_args(sweep)
    sweep.add_argument('--start', type=int, default=0, help='First seed (default: 0)')
    sweep.add_argument('--count', type=int, default=64, help='Number of seeds (default: 64)')
    sweep.add_argument(
        '--workers', type=int, default=None,
        help='Number of parallel workers (default: cpu_count)'
    )
    sweep.add_argument(
        '--threshold', type=float, default=0.05,
        help='Count seeds with quality at or below this (default: 0.05)'
    )

    lfsr = subparsers.add_parser('lfsr', help='Search for a maximal-period tap mask')
    lfsr.add_argument('--width', type=int, default=16, help='Register width in bits (default: 16)')

    return parser.parse_args(argv)


def make_config(args, seed: int = 0) -> EvolutionConfig:
    return EvolutionConfig(
        variant=Variant(args.variant),
        seed=seed,
        generations=args.generations,
        population_size=args.population,
    )


def cmd_run(args) -> int:
    engine = EvolutionEngine(make_config(args, args.seed))
    result = engine.evolve(progress_callback=None if args.quiet else print_progress)
    print(result.best_fitness, result.quality)
    return 0


def cmd_sweep(args) -> int:
    config = make_config(args)
    seeds = range(args.start, args.start + args.count)
    dataset = load_iris()

    def progress_callback(seed: int, quality: float):
        print(f"   seed {seed:6d} | quality {quality:.4f}", flush=True)

    start_time = time.time()
    result = run_sweep(
        seeds,
        config,
        n_workers=args.workers,
        threshold=args.threshold,
        dataset=dataset,
        progress_callback=progress_callback,
    )
    elapsed = time.time() - start_time

    print()
    print(result.summary())
    print(f"Runtime: {elapsed:.1f}s")
    return 0


def cmd_lfsr(args) -> int:
    mask = find_maximal_mask(args.width)
    if mask is None:
        print(f"no maximal-period mask for width {args.width}")
        return 1
    print(f"{mask:x} period={period(mask, args.width)}")
    return 0


COMMANDS = {
    'run': cmd_run,
    'sweep': cmd_sweep,
    'lfsr': cmd_lfsr,
}


def main(argv=None) -> int:
    args = parse_args(argv)
    return COMMANDS[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
