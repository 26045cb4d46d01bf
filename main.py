#!/usr/bin/env python3
"""
GOODNESS - Exploring Iterative Improvement

Tunes the four shift amounts of a hash-table "safety" mixer with simulated
annealing so that a word list spreads over the buckets with as few
collisions as possible.

Usage:
    python main.py                           # What I learned + usage
    python main.py small                     # 1,024-bucket table
    python main.py medium large              # Several modes, in order
    python main.py all                       # small, medium, large, bad-hash
    python main.py bad-hash                  # Byte-sum string hash for contrast
    python main.py quiet --seed 7            # One summary line
    python main.py large --codes hashed      # Start from a pre-hashed file
    python main.py small --plot plots --export-codes
    python main.py medium --random-start     # Search from a random state

Pipeline:
    words -> primary hash -> codes -> safety hash(a, b, c, d) -> buckets
                                           ^
                                  simulated annealing
"""

import os
import argparse
import sys

import numpy as np

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)


# =============================================================================
# BANNER
# =============================================================================

BANNER = """
╔══════════════════════════════════════════════════════════════════════════════╗
║                                                                              ║
║   GOODNESS - EXPLORING ITERATIVE IMPROVEMENT                                 ║
║                                                                              ║
║      h = code ^ (code >> a) ^ (code >> b)                                    ║
║      return h ^ (h >> c) ^ (h >> d)                                          ║
║                                                                              ║
║      Search: simulated annealing, T(k) = 100 / (k / kmax)                    ║
║                                                                              ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""


# =============================================================================
# WARMUP
# =============================================================================

def warmup_jit(verbose: bool = True):
    """Warm up JIT compilation for the hashing kernels."""
    from core.hashing import warmup

    if verbose:
        print("\n🔥 Warming up JIT compilation...")
    warmup(verbose=False)
    if verbose:
        print("   ✅ JIT warmup complete!")


# =============================================================================
# COMMANDS
# =============================================================================

def parse_modes(commands):
    """
    Turn command words into run modes.

    Unknown words are reported and skipped; the rest still run.

    Returns:
        (modes, unknown_words)
    """
    from config import RunMode

    modes = []
    unknown = []
    for text in commands:
        try:
            modes.append(RunMode.parse(text))
        except ValueError as e:
            print(f"❌ {e}")
            unknown.append(text)

    return modes, unknown


def build_configs(modes, kmax=None):
    """Experiment configs for the given modes, with 'all' expanded."""
    from config import expand_modes, get_config_for_mode

    return [get_config_for_mode(mode, iteration_budget=kmax) for mode in expand_modes(modes)]


def cmd_intro(program):
    """No commands: explain what was learned and how to run it."""
    from utils.report import print_learned, print_usage

    print(BANNER)
    print_learned()
    print_usage(program)


def cmd_run(args, modes):
    """Run the requested experiments and summarize them."""
    from core.state import random_state
    from runners.experiment import run_suite
    from utils.codes_io import CodeSource, write_codes
    from utils.report import print_suite_summary

    configs = build_configs(modes, kmax=args.kmax)
    loud = any(c.verbose for c in configs)

    if loud:
        print(BANNER)
    warmup_jit(verbose=loud)

    source = CodeSource(words_path=args.words, codes_path=args.codes)

    if args.export_codes:
        path = write_codes(source.codes('primary'), args.export_codes)
        print(f"\n📄 Codes saved: {path}")

    rng = np.random.default_rng(args.seed)
    if args.random_start:
        for config in configs:
            config.initial_state = random_state(rng)

    results = run_suite(source, configs, rng=rng, progress_bar=args.progress)

    print_suite_summary(results)

    if args.plot:
        from utils.visualization import plot_experiment

        os.makedirs(args.plot, exist_ok=True)
        for result in results:
            save_path = os.path.join(args.plot, f"{result.name}.png")
            plot_experiment(result, source.codes(result.hash_name), save_path=save_path)

    return results


# =============================================================================
# MAIN
# =============================================================================

def build_parser():
    from config import DEFAULT_CODES_FILE, DEFAULT_WORDS_FILE

    parser = argparse.ArgumentParser(
        description="Tune a hash mixer with simulated annealing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py                           # What I learned + usage
    python main.py small                     # Small table
    python main.py all --seed 42             # Every preset, reproducibly
    python main.py large --codes hashed      # Pre-hashed input
        """
    )

    parser.add_argument('commands', nargs='*', metavar='COMMAND',
                        help='small | medium | large | bad-hash | quiet | all')

    # Input
    parser.add_argument('--words', type=str, default=DEFAULT_WORDS_FILE, metavar='PATH',
                        help='Word list to hash')
    parser.add_argument('--codes', type=str, default=None, metavar='PATH',
                        help='Pre-hashed codes file (one integer per line)')
    parser.add_argument('--export-codes', type=str, nargs='?', const=DEFAULT_CODES_FILE,
                        default=None, metavar='PATH',
                        help=f'Write primary-hash codes to PATH (default: {DEFAULT_CODES_FILE})')

    # Search controls
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--kmax', type=int, default=None, help='Iteration budget override')
    parser.add_argument('--random-start', action='store_true',
                        help='Seed each search from a random state instead of the baseline')

    # Output
    parser.add_argument('--plot', type=str, default=None, metavar='DIR', help='Save plots to DIR')
    parser.add_argument('--no-progress', dest='progress', action='store_false',
                        help='Hide the progress bar')

    return parser


def main(argv=None):
    from core.errors import GoodnessError

    parser = build_parser()
    args = parser.parse_args(argv)
    program = os.path.basename(sys.argv[0]) or "main.py"

    if not args.commands:
        cmd_intro(program)
        return 0

    modes, unknown = parse_modes(args.commands)
    if not modes:
        print("\n⚠️  Nothing to run.")
        return 1 if unknown else 0

    try:
        cmd_run(args, modes)

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 1

    except (GoodnessError, ValueError) as e:
        print(f"\n❌ Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
