"""
Reporting - Console output for experiment results, usage and reflections.
"""

from typing import List

from core.energy import collision_stats
from core.hashing import mix_codes, to_bit_string
from core.state import State


LEARNED = """
📝 What I learned

   A string hash is only half of a hash table. Java's h = 31*h + c spreads
   words well over 32 bits, but a table of 2^k buckets only looks at the low
   k bits, so a second mixing step has to fold the high bits down.

   The mixer h ^ (h >> a) ^ (h >> b), then h ^ (h >> c) ^ (h >> d), has only
   four knobs, each 0-31. That space is tiny (32^4 = 1,048,576 states) but
   each evaluation re-buckets the whole word list, so sampling it with
   simulated annealing is far cheaper than sweeping it.

   Early on the temperature is huge and the search wanders freely; as it
   cools, worse moves get rejected more often and the search settles. Keeping
   the best state separate from the working state means wandering never
   costs anything.

   The byte-sum hash (h = h + c) is beyond repair: anagrams collide and the
   sums never leave the low bits, so no choice of shifts can spread them.
"""


def format_state(state: State) -> str:
    return f"a={state.a:>2} b={state.b:>2} c={state.c:>2} d={state.d:>2}"


def print_learned():
    print(LEARNED)


def print_usage(program: str = "main.py"):
    print(f"""
Usage:
    python {program} [command ...] [options]

Commands:
    small       Tune for a {1 << 10:,}-bucket table
    medium      Tune for a {1 << 16:,}-bucket table
    large       Tune for a {1 << 20:,}-bucket table
    bad-hash    Same as large, but words hashed with the byte-sum hash
    quiet       Medium table, one summary line only
    all         small, medium, large and bad-hash in turn

Options:
    --words PATH          Word list (default: words)
    --codes PATH          Read pre-hashed codes instead of a word list
    --export-codes [PATH] Write primary-hash codes to PATH (default: hashed)
    --seed N              Seed the random generator
    --kmax N              Override the iteration budget
    --random-start        Start each search from a random state
    --plot DIR            Save occupancy/energy plots to DIR
""")


def print_comparison(result, codes=None):
    """
    Print tuned vs. baseline for one experiment.

    Args:
        result: ExperimentResult
        codes: If given, add bucket statistics for both states and show how
            both mix the first code
    """
    tuned, baseline = result.tuned_energy, result.baseline_energy
    delta = baseline - tuned
    pct = (100.0 * delta / baseline) if baseline > 0 else 0.0

    print(f"\n{'='*60}")
    print(f"📊 {result.name}: {result.num_codes:,} codes, {result.table_size:,} buckets")
    print(f"{'='*60}")
    print(f"   Baseline {format_state(result.baseline_state)} -> {baseline:>10,.0f} collisions")
    print(f"   Tuned    {format_state(result.tuned_state)} -> {tuned:>10,.0f} collisions")

    if delta > 0:
        print(f"   ✅ {delta:,.0f} fewer collisions ({pct:.2f}%)")
    elif delta == 0:
        print("   ➖ No improvement over the baseline")
    else:
        print(f"   ⚠️  {-delta:,.0f} more collisions than the baseline")

    if codes is None or len(codes) == 0:
        return

    for label, state in (("baseline", result.baseline_state), ("tuned", result.tuned_state)):
        stats = collision_stats(codes, state, result.table_size)
        print(f"   {label:<8} max chain {stats.max_occupancy}, "
              f"{stats.occupied_buckets:,} buckets used, "
              f"{stats.mean_excess_per_bucket:.3f} excess per used bucket")

    sample_code = int(codes[0])
    base_mix = int(mix_codes([sample_code], *result.baseline_state.as_tuple())[0])
    tuned_mix = int(mix_codes([sample_code], *result.tuned_state.as_tuple())[0])
    print(f"\n   code     {to_bit_string(sample_code)}")
    print(f"   baseline {to_bit_string(base_mix)}")
    print(f"   tuned    {to_bit_string(tuned_mix)}")


def print_suite_summary(results: List):
    """One line per experiment."""
    if not results:
        print("\nNo experiments were run.")
        return

    print(f"\n{'='*78}")
    print(f"{'mode':<10} {'buckets':>10} {'baseline':>12} {'tuned':>12}  state")
    print(f"{'-'*78}")
    for r in results:
        print(f"{r.name:<10} {r.table_size:>10,} {r.baseline_energy:>12,.0f} "
              f"{r.tuned_energy:>12,.0f}  {r.tuned_state}")
    print(f"{'='*78}")
