import concurrent.futures
import os
from typing import Sequence

from .types import KmerTally
from .utils import count_windows

# Chunks submitted per worker process
CHUNKS_PER_WORKER = 4


def resolve_workers(workers: int) -> int:
    """Return the worker pool size, with 0 meaning all available CPUs."""
    if workers < 0:
        raise ValueError(f"Worker count must be non-negative, got {workers}")
    if workers == 0:
        return os.cpu_count() or 1
    return workers


def partition_records(records: Sequence[bytes], n_chunks: int) -> list[Sequence[bytes]]:
    """Split records into at most ``n_chunks`` contiguous, order-preserving chunks."""
    if n_chunks < 1:
        raise ValueError(f"Chunk count must be positive, got {n_chunks}")
    if not records:
        return []
    size = -(-len(records) // n_chunks)
    return [records[i:i + size] for i in range(0, len(records), size)]


def count_records(
    records: Sequence[bytes], k: int, reverse_complement: bool = False
) -> KmerTally:
    """Count k-mers of the given records sequentially into a fresh tally."""
    tally = KmerTally()
    for record in records:
        if len(record) < k:
            tally.discarded.append(len(record))
            continue
        tally.windows += count_windows(record, k, tally.counts, reverse_complement)
        tally.scanned_length += len(record)
    return tally


def count_kmers(
    records: Sequence[bytes],
    k: int,
    reverse_complement: bool = False,
    workers: int = 0,
) -> KmerTally:
    """
    Count all k-mers across records using a pool of worker processes.

    Records are partitioned into contiguous chunks; each worker builds its own
    tally and the caller merges them in chunk order, so the result does not
    depend on scheduling.

    :param records: Sequence records to scan.
    :param k: k-mer length, at least 1.
    :param reverse_complement: Also count the reverse complement of every window.
    :param workers: Pool size; 0 uses all available CPUs.
    :returns: Merged tally of counts, scanned length and discarded records.
    :raises InvalidBaseError: If reverse complements are counted and a window
        contains a character other than A, C, G, T. No partial tally is returned.
    """
    if k < 1:
        raise ValueError(f"k-mer size must be positive, got {k}")
    n_workers = resolve_workers(workers)
    chunks = partition_records(records, n_workers * CHUNKS_PER_WORKER)
    if n_workers == 1 or len(chunks) <= 1:
        return count_records(records, k, reverse_complement)

    tally = KmerTally()
    max_workers = min(n_workers, len(chunks))
    with concurrent.futures.ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(count_records, chunk, k, reverse_complement)
            for chunk in chunks
        ]
        try:
            for future in futures:
                tally.merge(future.result())
        except Exception:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
    return tally
