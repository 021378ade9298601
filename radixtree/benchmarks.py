"""
Various benchmarks to evaluate ordered byte-string indexes:

1.  insertion_performance:
       Measure build time, throughput and peak memory while inserting keys.
2.  lookup_performance:
       Measure exact lookup speed and hit rate.
3.  prefix_search_performance:
       Measure prefix search speed and the number of values returned.
4.  ordered_query_performance:
       Measure predecessor and successor query speed.
5.  removal_performance:
       Measure removal speed.
6.  index_equivalence:
       Compare two indexes on the results of every query.
7.  benchmarks:
       Run all benchmarks and print a summary of results to the console.
"""

import tracemalloc
from timeit import default_timer as timer
from typing import Any, Callable, Dict, List, Tuple


def insertion_performance(index: Any, keys: Dict[bytes, Any]) -> Dict[str, float]:
    """
    Measure insertion speed and memory usage.

    Args:
        index (Any): An empty index with an `insert` method.
        keys (Dict[bytes, Any]): Keys and the values to insert.

    Returns:
        Dict[str, float]: Total time, throughput, average latency and peak memory in MB.
    """
    tracemalloc.start()
    start_time = timer()
    for key, value in keys.items():
        index.insert(key, value)
    end_time = timer()
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    total_time = end_time - start_time
    return {
        "total_time_s": total_time,
        "throughput_keys_per_s": len(keys) / total_time if total_time > 0 else float('inf'),
        "avg_latency_s": total_time / len(keys) if keys else 0.0,
        "peak_memory_mb": peak / (1024 * 1024),
    }


def lookup_performance(index: Any, keys: List[bytes]) -> Dict[str, float]:
    """
    Measure exact lookup speed.

    Args:
        index (Any): Index with a `get` method.
        keys (List[bytes]): Keys to look up, present or not.

    Returns:
        Dict[str, float]: Total time, throughput and the percentage of keys found.
    """
    start_time = timer()
    hits = sum(1 for key in keys if index.get(key)[1])
    end_time = timer()

    total_time = end_time - start_time
    return {
        "total_time_s": total_time,
        "throughput_keys_per_s": len(keys) / total_time if total_time > 0 else float('inf'),
        "hit_rate": hits / len(keys) * 100 if keys else 0.0,
    }


def prefix_search_performance(index: Any, prefixes: List[bytes]) -> Dict[str, float]:
    """
    Measure prefix search speed.

    Args:
        index (Any): Index with a `find` method.
        prefixes (List[bytes]): Prefixes to search for.

    Returns:
        Dict[str, float]: Total time, average latency and average number of values per search.
    """
    start_time = timer()
    total_results = sum(len(index.find(prefix)) for prefix in prefixes)
    end_time = timer()

    total_time = end_time - start_time
    return {
        "total_time_s": total_time,
        "avg_latency_s": total_time / len(prefixes) if prefixes else 0.0,
        "avg_results": total_results / len(prefixes) if prefixes else 0.0,
    }


def ordered_query_performance(index: Any, keys: List[bytes]) -> Dict[str, float]:
    """
    Measure predecessor and successor speed over stored keys.

    Args:
        index (Any): Index with `predecessor` and `successor` methods.
        keys (List[bytes]): Keys to query.

    Returns:
        Dict[str, float]: Time spent on each query type.
    """
    start_time = timer()
    for key in keys:
        index.predecessor(key)
    middle_time = timer()
    for key in keys:
        index.successor(key)
    end_time = timer()

    return {
        "predecessor_time_s": middle_time - start_time,
        "successor_time_s": end_time - middle_time,
    }


def removal_performance(index: Any, keys: List[bytes]) -> Dict[str, float]:
    """
    Measure removal speed. The index is emptied of `keys`.

    Args:
        index (Any): Index with a `remove` method.
        keys (List[bytes]): Keys to remove.

    Returns:
        Dict[str, float]: Total time and number of keys actually removed.
    """
    start_time = timer()
    removed = sum(1 for key in keys if index.remove(key)[1])
    end_time = timer()

    return {
        "total_time_s": end_time - start_time,
        "num_removed": float(removed),
    }


def index_equivalence(index1: Any, index2: Any, keys: List[bytes], prefixes: List[bytes]) -> Tuple[int, int, float]:
    """
    Compare two indexes on every query.

    Args:
        index1 (Any): First index.
        index2 (Any): Second index, filled with the same keys.
        keys (List[bytes]): Keys used for get, longest_prefix, predecessor and successor.
        prefixes (List[bytes]): Prefixes used for find.

    Returns:
        Tuple containing:
            matches (int): Number of queries with identical results.
            total (int): Number of queries compared.
            match_rate (float): Percentage of identical results.
    """
    matches = 0
    total = 0

    for key in keys:
        for query in ("get", "longest_prefix", "predecessor", "successor"):
            total += 1
            if getattr(index1, query)(key) == getattr(index2, query)(key):
                matches += 1

    for prefix in prefixes:
        total += 1
        if index1.find(prefix) == index2.find(prefix):
            matches += 1

    # Whole-index queries
    for query in ("min", "max", "values"):
        total += 1
        if getattr(index1, query)() == getattr(index2, query)():
            matches += 1

    match_rate = matches / total * 100 if total else 0.0
    return matches, total, match_rate


def index_name(factory: Callable[[], Any]) -> str:
    """Display name of an index factory; builds an index only when the factory has no name."""
    return getattr(factory, "__name__", None) or type(factory()).__name__


def _print_performance(name: str, build: Dict[str, float], lookup: Dict[str, float],
                       search: Dict[str, float], ordered: Dict[str, float], removal: Dict[str, float]) -> None:
    print(f"=== Insertion Performance for {name} ===")
    print(f"Total time:     {build['total_time_s']:.4f}s")
    print(f"Throughput:     {build['throughput_keys_per_s']:.2f} keys/s")
    print(f"Avg. latency:   {build['avg_latency_s']:.8f}s per key")
    print(f"Peak memory:    {build['peak_memory_mb']:.2f} MB")

    print("\n=== Lookup Performance ===")
    print(f"Total time:     {lookup['total_time_s']:.4f}s")
    print(f"Throughput:     {lookup['throughput_keys_per_s']:.2f} keys/s")
    print(f"Hit rate:       {lookup['hit_rate']:.2f}%")

    print("\n=== Prefix Search Performance ===")
    print(f"Total time:     {search['total_time_s']:.4f}s")
    print(f"Avg. latency:   {search['avg_latency_s']:.6f}s per prefix")
    print(f"Avg. results:   {search['avg_results']:.2f} values per prefix")

    print("\n=== Ordered Query Performance ===")
    print(f"Predecessor:    {ordered['predecessor_time_s']:.4f}s")
    print(f"Successor:      {ordered['successor_time_s']:.4f}s")

    print("\n=== Removal Performance ===")
    print(f"Total time:     {removal['total_time_s']:.4f}s")
    print(f"Num. removed:   {int(removal['num_removed'])}")


def benchmarks(
    index_factory: Callable[[], Any],
    keys: Dict[bytes, Any],
    prefix_length: int = 2,
    reference_factories: List[Callable[[], Any]] = [],
    compare_only: bool = False
) -> None:
    """
    Run all benchmark functions and print results to the console.

    Args:
        index_factory (Callable[[], Any]): Builds an empty index, e.g. RadixTree.
        keys (Dict[bytes, Any]): Keys and values to index.
        prefix_length (int): Length of the prefixes used for prefix search.
        reference_factories (List[Callable[[], Any]], optional): Other index types to compare against.
        compare_only (bool): Only run the equivalence check against the references.
    """
    key_list = list(keys)
    prefixes = sorted({key[:prefix_length] for key in key_list})
    # Misses for the lookup benchmark
    probes = key_list + [key + b"\x00" for key in key_list]
    name1 = index_name(index_factory)

    if compare_only:
        if not reference_factories:
            print("No reference indexes provided for comparison.")
            return
        index1 = index_factory()
        for key, value in keys.items():
            index1.insert(key, value)
        for factory in reference_factories:
            name2 = index_name(factory)
            index2 = factory()
            for key, value in keys.items():
                index2.insert(key, value)
            matches, total, rate = index_equivalence(index1, index2, key_list, prefixes)
            print(f"=== Index Equivalence ({name1} vs {name2}) ===")
            print(f"Match rate: {rate:.2f}% ({matches}/{total})")
        return

    for position, factory in enumerate([index_factory] + list(reference_factories)):
        name = index_name(factory)
        index = factory()
        build = insertion_performance(index, keys)
        lookup = lookup_performance(index, probes)
        search = prefix_search_performance(index, prefixes)
        ordered = ordered_query_performance(index, key_list)
        removal = removal_performance(index, key_list)
        if position > 0:
            print()
        _print_performance(name, build, lookup, search, ordered, removal)
