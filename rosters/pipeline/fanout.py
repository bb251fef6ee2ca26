from concurrent.futures import ThreadPoolExecutor

from rosters import config


def fan_out(items, worker, concurrency=config.MAX_CONCURRENCY):
    """
    Run worker over items with at most `concurrency` calls in flight, capped at
    config.MAX_CONCURRENCY.
    Results come back in input order. Workers are expected to capture their own
    per-item failures; anything they raise propagates to the caller.
    """
    items = list(items)
    if not items:
        return []
    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")

    max_workers = min(concurrency, config.MAX_CONCURRENCY, len(items))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(worker, items))
